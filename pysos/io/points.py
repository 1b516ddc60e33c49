from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

_DELIMITERS = {".csv": ",", ".tsv": "\t", ".txt": None}


def load_points(
    path: str | Path,
    *,
    delimiter: str | None = None,
    skip_header: int = 0,
) -> NDArray[np.float64]:
    """Read a point set (one feature vector per row) from disk.

    Parameters
    ----------
    path:
        `.npy` array, or a delimited text file (`.csv`, `.tsv`, `.txt`).
    delimiter:
        Overrides the delimiter implied by the suffix (whitespace for `.txt`).
    skip_header:
        Number of leading lines to skip in text files.

    Returns
    -------
    points : ndarray of shape (n_samples, n_features)
    """

    in_path = Path(path)
    if not in_path.is_file():
        raise FileNotFoundError(f"Unable to read points: {str(in_path)!r}")

    suffix = in_path.suffix.lower()
    if suffix == ".npy":
        data = np.load(in_path, allow_pickle=False)
    elif suffix in _DELIMITERS:
        sep = delimiter if delimiter is not None else _DELIMITERS[suffix]
        try:
            data = np.loadtxt(in_path, delimiter=sep, skiprows=int(skip_header), ndmin=2)
        except ValueError as exc:
            raise ValueError(f"Failed to parse {str(in_path)!r} as numeric rows: {exc}") from exc
    else:
        raise ValueError(
            f"Unsupported points file extension: {suffix!r} for {str(in_path)!r}. "
            "Supported: .npy, .csv, .tsv, .txt."
        )

    data = np.asarray(data, dtype=np.float64)
    if data.ndim == 1:
        data = data.reshape(-1, 1)
    if data.ndim != 2:
        raise ValueError(f"Points must form a 2D array, got shape {data.shape}")

    logger.info("Loaded %d points with %d features from %s", data.shape[0], data.shape[1], in_path)
    return data
