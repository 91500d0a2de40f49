"""
Tuckql 值编解码

写入时将结构化值（dict/list）序列化为 JSON 文本；
读取时尝试将文本列值解析回结构化数据，失败则保留原值。
"""

import importlib
import json
import math
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from ..common.exceptions import ConfigurationError, SerializationError


class JsonImpl(NamedTuple):
    """JSON 实现"""
    name: str
    dumps: Callable[[Any], str]
    loads: Callable[[str], Any]


def _reject_constant(name: str) -> Any:
    # NaN / Infinity 不是合法 JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def _json_default(value: Any) -> Any:
    # 嵌套的 datetime/date 与顶层一致，序列化为 ISO 格式字符串
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _ensure_finite(value: Any) -> Any:
    """拒绝包含 NaN / Infinity 的解析结果"""
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Invalid JSON constant: {value}")
    if isinstance(value, dict):
        for item in value.values():
            _ensure_finite(item)
    elif isinstance(value, list):
        for item in value:
            _ensure_finite(item)
    return value


def _stdlib_impl() -> JsonImpl:
    return JsonImpl(
        name='json',
        dumps=lambda value: json.dumps(value, ensure_ascii=False, default=_json_default),
        loads=lambda text: json.loads(text, parse_constant=_reject_constant),
    )


def _orjson_impl() -> JsonImpl:
    orjson = importlib.import_module('orjson')
    return JsonImpl(
        name='orjson',
        dumps=lambda value: orjson.dumps(value, default=_json_default).decode('utf-8'),
        loads=orjson.loads,
    )


def _ujson_impl() -> JsonImpl:
    ujson = importlib.import_module('ujson')
    # ujson 接受 NaN / Infinity，需要额外校验
    return JsonImpl(
        name='ujson',
        dumps=lambda value: ujson.dumps(value, ensure_ascii=False, default=_json_default),
        loads=lambda text: _ensure_finite(ujson.loads(text)),
    )


_JSON_IMPLS: Dict[str, Callable[[], JsonImpl]] = {
    'json': _stdlib_impl,
    'orjson': _orjson_impl,
    'ujson': _ujson_impl,
}


def get_json_impl(name: Optional[str] = None) -> JsonImpl:
    """
    获取 JSON 实现

    Args:
        name: 库名（'json', 'orjson', 'ujson'），None 表示标准库

    Returns:
        JsonImpl 实例

    Raises:
        ConfigurationError: 未知的库名，或指定的库未安装
    """
    key = name or 'json'
    factory = _JSON_IMPLS.get(key)
    if factory is None:
        raise ConfigurationError(
            f"Unknown JSON implementation: '{key}'. "
            f"Valid implementations: {', '.join(sorted(_JSON_IMPLS))}"
        )
    try:
        return factory()
    except ImportError as e:
        raise ConfigurationError(
            f"JSON implementation '{key}' is not installed (pip install tuckql[{key}])"
        ) from e


def encode_value(value: Any, impl: JsonImpl) -> Any:
    """
    编码单个值以便作为绑定参数

    dict/list/tuple 序列化为 JSON 文本，datetime/date（包括嵌套在结构中的）序列化为 ISO 格式字符串，
    其他值（包括 None 和 bytes）保持原样。

    Args:
        value: 原始值
        impl: JSON 实现

    Returns:
        可绑定的值

    Raises:
        SerializationError: 结构化值无法序列化
    """
    if isinstance(value, (dict, list, tuple)):
        try:
            return impl.dumps(value)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize {type(value).__name__} to JSON: {e}") from e
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def try_decode(value: Any, impl: JsonImpl) -> Tuple[Any, bool]:
    """
    尝试将列值解析为 JSON

    只处理 str；解析失败或非字符串值返回 (原值, False)。
    注意数字样式的字符串（如 '42'）会被解析为数字。

    Args:
        value: 列值
        impl: JSON 实现

    Returns:
        (解析后的值, 是否解析成功)
    """
    if not isinstance(value, str):
        return value, False
    try:
        return impl.loads(value), True
    except (ValueError, TypeError):
        return value, False


def decode_row(row: Mapping[str, Any], impl: JsonImpl) -> Dict[str, Any]:
    """解码一行，返回新的字典"""
    decoded: Dict[str, Any] = {}
    for key in row.keys():
        decoded[key], _ = try_decode(row[key], impl)
    return decoded


def decode_rows(rows: Iterable[Mapping[str, Any]], impl: JsonImpl) -> List[Dict[str, Any]]:
    """解码结果集"""
    return [decode_row(row, impl) for row in rows]
