"""根据 JSON 数据生成 JSON Schema
"""
import json
import logging
import sys

import click
import jsonschema
import pyaml
import yaml

import schemautils
from schemautils import util
from schemautils.apischema import Options, SCHEMA_URLS, build_schema
from schemautils.schemamerge import combine_schemas


class InvalidJSON(ValueError):
    pass


def to_options(options):
    if options is None:
        return Options()
    if isinstance(options, Options):
        return options
    return Options.from_dict(options)


def wrap_schema(schema, options):
    if options.optimize_for_llm:
        schema = util.strip_required(schema)
    # $schema 放在最前面
    return dict({'$schema': options.schema_url}, **schema)


def value_to_schema(data, options=None):
    options = to_options(options)
    return wrap_schema(build_schema(data, options), options)


def json_to_schema(text, options=None):
    options = to_options(options)
    try:
        data = json.loads(text)
    except ValueError as e:
        raise InvalidJSON('Invalid JSON: %s' % e) from e
    return value_to_schema(data, options)


def documents_to_schema(documents, options=None):
    """多个文档(样本)推导出一个 Schema
    """
    options = to_options(options)
    schemas = [build_schema(data, options) for data in documents]
    if len(schemas) == 1:
        schema = schemas[0]
    else:
        schema = combine_schemas(schemas)
    return wrap_schema(schema, options)


def check_schema(schema):
    validator = jsonschema.validators.validator_for(schema)
    validator.check_schema(schema)


class SchemaGen(object):
    def __init__(self, options, use_yaml, output_format, compact, check, stats):
        self.options = options
        self.use_yaml = use_yaml
        self.output_format = output_format
        self.compact = compact
        self.check = check
        self.stats = stats

    def run(self, inputs):
        documents = []
        for fp in inputs:
            documents.extend(self.read_documents(fp))
        if not documents:
            raise click.ClickException('no input documents')
        logging.info('%d document(s), %r', len(documents), self.options)

        schema = documents_to_schema(documents, self.options)

        if self.check:
            try:
                check_schema(schema)
            except jsonschema.SchemaError as e:
                raise click.ClickException('generated schema is invalid: %s' % e.message)

        if self.stats:
            self.report_size(documents, schema)

        return self.format(schema)

    def read_documents(self, fp):
        text = fp.read()
        try:
            return util.load_documents(text, self.use_yaml)
        except yaml.YAMLError as e:
            raise click.ClickException('%s: Invalid YAML: %s' % (fp.name, e))
        except ValueError as e:
            raise click.ClickException('%s: Invalid JSON: %s' % (fp.name, e))

    def report_size(self, documents, schema):
        size = len(util.dump_json(schema, indent=None))
        logging.info('schema size: %d bytes', size)
        if not self.options.optimize_for_llm:
            return

        original = Options(
            detect_format=self.options.detect_format,
            schema_version=self.options.schema_version,
            depth=self.options.depth,
        )
        original_size = len(util.dump_json(documents_to_schema(documents, original), indent=None))
        logging.info('original (with required): %d bytes', original_size)
        logging.info('optimized (no required): %d bytes (%.1f%% reduction)',
                     size, (1 - size / original_size) * 100)

    def format(self, schema):
        if self.output_format == 'yaml':
            return pyaml.dump(schema)
        return util.dump_json(schema, indent=None if self.compact else 2) + '\n'


@click.command()
@click.option('--depth', '-D', type=click.IntRange(min=0), default=None, help='展开容器的最大层数(默认不限制).')
@click.option('--no-format', is_flag=True, help='不识别字符串格式.')
@click.option('--schema-version', '-s', type=click.Choice(sorted(SCHEMA_URLS)), default='07',
              help='JSON Schema 版本.')
@click.option('--optimize-for-llm', '-l', is_flag=True, help='去掉 required, 输出更紧凑.')
@click.option('--yaml', 'use_yaml', is_flag=True, help='输入为 YAML (允许多个文档).')
@click.option('--output-format', '-f', type=click.Choice(['json', 'yaml']), default='json', help='输出格式.')
@click.option('--compact', '-c', is_flag=True, help='紧凑输出 JSON.')
@click.option('--check', is_flag=True, help='检查生成的 Schema 是否合法.')
@click.option('--stats', is_flag=True, help='输出 Schema 大小.')
@click.option('--ofile', '-o', type=click.File('w', encoding='utf-8'), help='输出文件.')
@click.option('--debug', '-d', is_flag=True, help='是否输出调试信息.')
@click.option('--version', '-v', is_flag=True, is_eager=True, help='版本信息.')
@click.argument('srcfiles', nargs=-1, type=click.File('r', encoding='utf-8'))
def run(depth, no_format, schema_version, optimize_for_llm, use_yaml, output_format, compact, check, stats,
        ofile, debug, version, srcfiles):
    if version:
        print('schemagen %s' % schemautils.__version__)
        return

    log_format = '%(asctime)s - %(levelname)s - %(message)s'
    log_level = logging.DEBUG if debug else logging.INFO if stats else logging.WARNING
    logging.basicConfig(level=log_level, format=log_format)

    options = Options(
        detect_format=not no_format,
        schema_version=schema_version,
        depth=depth,
        optimize_for_llm=optimize_for_llm,
    )
    schemagen = SchemaGen(options, use_yaml, output_format, compact, check, stats)
    output = schemagen.run(srcfiles or [sys.stdin])
    (ofile or sys.stdout).write(output)


if __name__ == "__main__":
    run()
