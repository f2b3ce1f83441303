from __future__ import annotations

from typing import Any

import numpy as np

from pydepthmap.utils.optional_deps import require


def is_torch_tensor(value: Any) -> bool:
    """True for torch tensors, checked without importing torch."""

    return type(value).__module__.split(".", 1)[0] == "torch" and hasattr(value, "detach")


def tensor_to_numpy(tensor: Any) -> np.ndarray:
    """Convert a torch tensor of any device/dtype to a float numpy array.

    Half and bfloat16 tensors are widened to float32 first since numpy has no
    bfloat16 and the decoder only reads float32/float64 arrays.
    """

    torch = require("torch", purpose="torch tensor depth results")

    if not isinstance(tensor, torch.Tensor):
        raise TypeError(f"Expected torch.Tensor, got {type(tensor)}")

    t = tensor.detach().cpu()
    if t.dtype != torch.float64:
        t = t.to(torch.float32)
    return t.contiguous().numpy()
