import json
from collections.abc import Mapping

import yaml


def freeze(data):
    """转换为可哈希的规范形式，用于比较两个 Schema 是否结构相同

    对象忽略键的顺序，required 忽略顺序，其他列表保留顺序；
    标量带上类型，避免 1 / 1.0 / True 被视为相同
    """
    if isinstance(data, Mapping):
        items = []
        for name, value in data.items():
            if name == 'required' and isinstance(value, list) and all(isinstance(v, str) for v in value):
                items.append((name, ('set', tuple(sorted(set(value))))))
            else:
                items.append((str(name), freeze(value)))
        return ('object', tuple(sorted(items)))
    elif isinstance(data, (list, tuple)):
        return ('array', tuple(freeze(item) for item in data))
    else:
        return (type(data).__name__, data)


def same_schema(schema, other):
    return freeze(schema) == freeze(other)


def strip_required(schema):
    """去掉所有 required, 生成更紧凑的 Schema
    """
    if isinstance(schema, Mapping):
        result = {}
        for name, value in schema.items():
            if name == 'required':
                continue
            if name == 'properties' and isinstance(value, Mapping):
                # ! properties 的键是属性名，可能恰好叫 required
                result[name] = {key: strip_required(sub) for key, sub in value.items()}
            else:
                result[name] = strip_required(value)
        return result
    elif isinstance(schema, list):
        return [strip_required(item) for item in schema]
    return schema


class JSONLikeLoader(yaml.SafeLoader):
    """日期时间保留为字符串，与 JSON 输入一致
    """
    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag != 'tag:yaml.org,2002:timestamp']
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }


def load_documents(text, use_yaml=False):
    if use_yaml:
        return [doc for doc in yaml.load_all(text, Loader=JSONLikeLoader)]
    return [json.loads(text)]


def dump_json(data, indent=2):
    if indent:
        return json.dumps(data, ensure_ascii=False, indent=indent)
    return json.dumps(data, ensure_ascii=False, separators=(',', ':'))
