import decimal
import json
import logging
import math
import numbers
from collections.abc import Mapping

from schemautils.schemaformat import build_string
from schemautils.schemamerge import combine_schemas

SCHEMA_URLS = {
    '07': 'http://json-schema.org/draft-07/schema#',
    '2019-09': 'https://json-schema.org/draft/2019-09/schema',
    '2020-12': 'https://json-schema.org/draft/2020-12/schema',
}

JSON_TYPES = ('string', 'number', 'integer', 'boolean', 'null', 'object', 'array')


class Options(object):
    """推导选项

    depth: 展开容器(array/object)的最大层数, None 表示不限制
    """
    detect_format = True
    schema_version = '07'
    depth = None
    optimize_for_llm = False

    # 兼容 camelCase 写法
    aliases = {
        'detectFormat': 'detect_format',
        'schemaVersion': 'schema_version',
        'optimizeForLLM': 'optimize_for_llm',
    }

    def __init__(self, detect_format=True, schema_version='07', depth=None, optimize_for_llm=False):
        if schema_version not in SCHEMA_URLS:
            raise ValueError('unknown schema version: %r' % (schema_version,))
        if depth is not None and (isinstance(depth, bool) or not isinstance(depth, int) or depth < 0):
            raise ValueError('depth must be a non-negative integer or None: %r' % (depth,))
        self.detect_format = detect_format
        self.schema_version = schema_version
        self.depth = depth
        self.optimize_for_llm = optimize_for_llm

    @classmethod
    def from_dict(cls, data):
        kwargs = {}
        for name, value in data.items():
            name = cls.aliases.get(name, name)
            if name not in ('detect_format', 'schema_version', 'depth', 'optimize_for_llm'):
                raise ValueError('unknown option: %s' % name)
            kwargs[name] = value
        return cls(**kwargs)

    @property
    def schema_url(self):
        return SCHEMA_URLS[self.schema_version]

    def reached(self, depth):
        return self.depth is not None and depth >= self.depth

    def __repr__(self):
        return 'Options(detect_format=%r, schema_version=%r, depth=%r, optimize_for_llm=%r)' % (
            self.detect_format, self.schema_version, self.depth, self.optimize_for_llm)


class Kind(object):
    """输入值的分类，先归类再分派
    """
    NULL = 'null'
    BOOLEAN = 'boolean'
    NUMBER = 'number'
    STRING = 'string'
    ARRAY = 'array'
    OBJECT = 'object'
    UNREPRESENTABLE = 'unrepresentable'


def value_kind(value):
    if value is None:
        return Kind.NULL
    # ! bool 是 int 的子类，必须先判断
    elif isinstance(value, bool):
        return Kind.BOOLEAN
    elif isinstance(value, (numbers.Real, decimal.Decimal)):
        return Kind.NUMBER
    elif isinstance(value, str):
        return Kind.STRING
    elif isinstance(value, (list, tuple)):
        return Kind.ARRAY
    elif isinstance(value, Mapping):
        return Kind.OBJECT
    else:
        return Kind.UNREPRESENTABLE


def is_whole_number(data):
    if isinstance(data, numbers.Integral):
        return True
    if isinstance(data, float):
        return data.is_integer()
    try:
        return math.isfinite(data) and data == int(data)
    except (TypeError, ValueError, OverflowError):
        return False


def property_name(name):
    """与 JSON 序列化后的属性名保持一致(1 -> "1", None -> "null")
    """
    if isinstance(name, str):
        return name
    if name is None or isinstance(name, (bool, int, float)):
        return json.dumps(name)
    return str(name)


def build_object(data, options, depth=0):
    if options.reached(depth):
        logging.debug('depth %d reached, object properties omitted', depth)
        return {
            'type': 'object',
        }

    properties = {}
    for name, value in data.items():
        properties[property_name(name)] = build_schema(value, options, depth + 1)
    schema = {
        'type': 'object',
        'properties': properties,
    }
    # 单个样本中出现的属性都是必需的
    if properties:
        schema.update(required=list(properties))
    return schema


def build_array(data, options, depth=0):
    if options.reached(depth):
        logging.debug('depth %d reached, array items omitted', depth)
        return {
            'type': 'array',
        }

    if not len(data):
        return {
            'type': 'array',
            'items': {},
        }

    schemas = [build_schema(item, options, depth + 1) for item in data]
    return {
        'type': 'array',
        'items': combine_schemas(schemas),
    }


def build_number(data):
    return {
        'type': 'integer' if is_whole_number(data) else 'number',
    }


def build_boolean(data):
    return {
        'type': 'boolean',
    }


def build_null(data):
    return {
        'type': 'null',
    }


def build_primitive(data, options):
    kind = value_kind(data)
    if kind == Kind.NUMBER:
        return build_number(data)
    elif kind == Kind.BOOLEAN:
        return build_boolean(data)
    elif kind == Kind.STRING:
        return build_string(data, options.detect_format)
    elif kind == Kind.NULL:
        return build_null(data)

    # 超出 JSON 类型范围的值，只给出类型名称
    cls = type(data)
    name = cls.__name__
    # ! 类名与 JSON 类型同名(如 object)时使用完整名称，避免被当作真正的 object 合并
    if name in JSON_TYPES:
        name = '%s.%s' % (cls.__module__, cls.__qualname__)
    logging.debug('unrepresentable value of type %s', name)
    return {
        'type': name,
    }


def build_schema(data, options=None, depth=0):
    if options is None:
        options = Options()
    elif isinstance(options, Mapping):
        options = Options.from_dict(options)

    kind = value_kind(data)
    if kind == Kind.NULL:
        return build_null(data)
    elif kind == Kind.ARRAY:
        return build_array(data, options, depth)
    elif kind == Kind.OBJECT:
        return build_object(data, options, depth)
    else:
        return build_primitive(data, options)
