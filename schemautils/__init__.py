__version__ = '0.1.0'

from schemautils.apischema import Options, build_schema  # noqa: E402
from schemautils.schemagen import InvalidJSON, json_to_schema, value_to_schema  # noqa: E402
from schemautils.schemamerge import deduplicate_schemas, merge_object_schemas  # noqa: E402
