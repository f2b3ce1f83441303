# Sphinx configuration for the pydepthmap API reference.

import os
import sys

# Add the repo root to the path so autodoc can import pydepthmap
sys.path.insert(0, os.path.abspath('../..'))

project = 'pydepthmap'
copyright = '2026, pydepthmap Contributors'
author = 'pydepthmap Contributors'
try:
    import pydepthmap as _pydepthmap
except Exception:
    release = '0.0.0'
    version = release
else:
    release = _pydepthmap.__version__
    version = release

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
    'sphinx.ext.autosummary',
]

# OpenCV and torch are only needed on the inference path.
autodoc_mock_imports = [
    "cv2",
    "torch",
    "yaml",
]

napoleon_google_docstring = False
napoleon_numpy_docstring = True

autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
    'undoc-members': True,
}
autodoc_typehints = 'description'
autosummary_generate = True

templates_path = ['_templates']
exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']
master_doc = 'index'

html_theme = 'sphinx_rtd_theme'
html_theme_options = {
    'collapse_navigation': False,
    'navigation_depth': 3,
}
htmlhelp_basename = 'pydepthmapdoc'

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'numpy': ('https://numpy.org/doc/stable/', None),
    'pillow': ('https://pillow.readthedocs.io/en/stable/', None),
}
