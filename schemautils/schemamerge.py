"""合并多个样本推导出的 Schema

- deduplicate_schemas: 去重，保留第一次出现的顺序
- merge_object_schemas: 合并多个 object Schema, 属性取并集，所有样本中都必需的属性才是必需的
- combine_schemas: 数组元素(或多个文档)的 Schema 合成一个
"""
import json
import logging
import sys

import click
from schemautils import util

MIXED = 'mixed'


def deduplicate_schemas(schemas):
    seen = set()
    unique = []
    for schema in schemas:
        key = util.freeze(schema)
        if key in seen:
            continue
        seen.add(key)
        unique.append(schema)
    return unique


def merge_property(schemas):
    first = schemas[0]
    if all(util.same_schema(first, schema) for schema in schemas[1:]):
        return first

    return {
        'oneOf': deduplicate_schemas(schemas),
    }


def merge_object_schemas(schemas):
    total = len(schemas)

    # 属性名取并集，保持第一次出现的顺序
    names = {}
    for schema in schemas:
        for name in schema.get('properties') or {}:
            names.setdefault(name, None)

    properties = {}
    required = []
    for name in names:
        collected = []
        always_required = True
        for schema in schemas:
            schema_properties = schema.get('properties') or {}
            if name not in schema_properties:
                continue
            collected.append(schema_properties[name])
            if name not in (schema.get('required') or ()):
                always_required = False

        if not collected:
            continue

        properties[name] = merge_property(collected)
        # 有样本缺少该属性时，不再是必需的
        if always_required and len(collected) == total:
            required.append(name)

    merged = {
        'type': 'object',
        'properties': properties,
    }
    if required:
        merged.update(required=required)
    return merged


def schema_type(schema):
    type = schema.get('type')
    # type 为列表(如 ["string", "null"]) 或缺失时无法归类
    if isinstance(type, str):
        return type
    return MIXED


def combine_schemas(schemas):
    """数组元素的 Schema 合成 items

    类型相同的 object 合并，类型相同的其他值只保留类型，类型不同时使用 oneOf
    """
    groups = {}
    for schema in schemas:
        groups.setdefault(schema_type(schema), []).append(schema)

    if len(groups) == 1:
        type, members = next(iter(groups.items()))
        if type == 'object':
            return merge_object_schemas(members)
        elif type != MIXED:
            return {
                'type': type,
            }

    unique = deduplicate_schemas(schemas)
    if len(unique) == 1:
        return unique[0]
    return {
        'oneOf': unique,
    }


def read_schema(fp):
    try:
        return json.load(fp)
    except ValueError as e:
        raise click.ClickException('%s: Invalid JSON: %s' % (fp.name, e))


@click.command()
@click.option('--ofile', '-o', type=click.File('w', encoding='utf-8'), help='输出文件.')
@click.option('--compact', '-c', is_flag=True, help='紧凑输出.')
@click.option('--debug', '-d', is_flag=True, help='是否输出调试信息.')
@click.argument('schemafiles', nargs=-1, required=True, type=click.File('r', encoding='utf-8'))
def run(ofile, compact, debug, schemafiles):
    log_format = '%(asctime)s - %(levelname)s - %(message)s'
    log_level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=log_level, format=log_format)

    schemas = []
    header = None
    for fp in schemafiles:
        schema = read_schema(fp)
        if not isinstance(schema, dict) or schema.get('type') != 'object':
            raise click.ClickException('%s: not an object schema' % fp.name)
        schema = dict(schema)
        url = schema.pop('$schema', None)
        if header is None:
            header = url
        elif url is not None and url != header:
            logging.warning('%s: $schema differs, keep %s', fp.name, header)
        logging.debug('loaded %s: %d properties', fp.name, len(schema.get('properties') or {}))
        schemas.append(schema)

    merged = merge_object_schemas(schemas)
    if header is not None:
        merged = dict({'$schema': header}, **merged)

    output = ofile or sys.stdout
    output.write(util.dump_json(merged, indent=None if compact else 2))
    output.write('\n')


if __name__ == "__main__":
    run()
