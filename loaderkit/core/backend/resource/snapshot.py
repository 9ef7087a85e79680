# -*- coding: utf-8 -*-
"""
输入快照与结构比较
用于判断宿主的data/params输入是否发生变化
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

RELEVANT_INPUT_FIELDS = ('data', 'params')


def take_snapshot(props: Mapping, fields: Iterable[str] = RELEVANT_INPUT_FIELDS) -> Dict[str, Any]:
    """
    截取与加载相关的输入字段

    Args:
        props: 宿主输入属性
        fields: 参与比较的字段名

    Returns:
        dict: 字段名 -> 深拷贝后的值
    """
    props = props or {}
    return {name: copy.deepcopy(props.get(name)) for name in fields}


def structurally_equal(left: Any, right: Any) -> bool:
    """
    深度结构比较，支持 dict / list / tuple / set / DataFrame / Series / ndarray
    """
    if left is right:
        return True

    if isinstance(left, (pd.DataFrame, pd.Series, pd.Index)) or isinstance(right, (pd.DataFrame, pd.Series, pd.Index)):
        if type(left) is not type(right):
            return False
        return left.equals(right)

    if isinstance(left, np.ndarray) or isinstance(right, np.ndarray):
        if not (isinstance(left, np.ndarray) and isinstance(right, np.ndarray)):
            return False
        if left.shape != right.shape:
            return False
        equal_nan = _nan_comparable(left) and _nan_comparable(right)
        return bool(np.array_equal(left, right, equal_nan=equal_nan))

    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if left.keys() != right.keys():
            return False
        return all(structurally_equal(left[key], right[key]) for key in left)

    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if type(left) is not type(right) or len(left) != len(right):
            return False
        return all(structurally_equal(a, b) for a, b in zip(left, right))

    if _is_missing_scalar(left) and _is_missing_scalar(right):
        return True

    try:
        return bool(left == right)
    except (TypeError, ValueError) as e:
        logger.debug(f"无法比较输入值，视为不同: {e}")
        return False


def snapshots_equal(previous: Dict[str, Any], current: Dict[str, Any]) -> bool:
    return structurally_equal(previous, current)


def _nan_comparable(array: np.ndarray) -> bool:
    return array.dtype.kind in 'fc'


def _is_missing_scalar(value: Any) -> bool:
    """标量缺失值（NaN / NaT / pd.NA），每次运行都是新对象，需按值视为相等"""
    return value is not None and pd.api.types.is_scalar(value) and bool(pd.isna(value))


__all__ = [
    'RELEVANT_INPUT_FIELDS',
    'take_snapshot',
    'structurally_equal',
    'snapshots_equal'
]
