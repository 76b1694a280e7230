"""Serialization utilities for JSON encoding of chart payloads.

Series built with numpy or pandas can carry numpy scalars, NaN and
Timestamps; the encoder below turns them into plain JSON values.
"""
from __future__ import annotations

import json
from datetime import datetime, date
from typing import Any

import numpy as np
import pandas as pd
from pydantic import BaseModel


class NumpyPandasEncoder(json.JSONEncoder):
    """
    JSON encoder for numpy, pandas and pydantic values.

    - numpy arrays, integers, floats and booleans
    - pandas DataFrames, Series and Timestamps
    - pydantic models (dumped with their field names)
    - NaN/NaT values (converted to None)

    Example:
        >>> json.dumps({"values": np.array([1, 2, 3])}, cls=NumpyPandasEncoder)
        '{"values": [1, 2, 3]}'
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, BaseModel):
            return obj.model_dump()

        if isinstance(obj, np.ndarray):
            return obj.tolist()

        if isinstance(obj, np.integer):
            return int(obj)

        if isinstance(obj, np.floating):
            if np.isnan(obj):
                return None
            return float(obj)

        if isinstance(obj, np.bool_):
            return bool(obj)

        if isinstance(obj, pd.DataFrame):
            return obj.to_dict("records")

        if isinstance(obj, pd.Series):
            return obj.to_list()

        if isinstance(obj, pd.Timestamp):
            if pd.isna(obj):
                return None
            return obj.isoformat()

        if obj is pd.NaT:
            return None

        if isinstance(obj, (datetime, date)):
            return obj.isoformat()

        return super().default(obj)


def json_serialize(obj: Any, indent: int | None = None) -> str:
    """
    Serialize an object to a JSON string, handling numpy and pandas types.

    Example:
        >>> json_serialize({"year": np.int64(2020)})
        '{"year": 2020}'
    """
    return json.dumps(obj, cls=NumpyPandasEncoder, indent=indent)
