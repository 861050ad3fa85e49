"""Assembles the mapped schema definition from a database introspector."""

import logging
from dataclasses import replace
from typing import List, Optional, Set

from .config import Config
from .database.base import DatabaseIntrospector
from .database.models import EnumTypes, SchemaDefinition, TableDefinition
from .database.type_mappers import TypeMapper, get_type_mapper

logger = logging.getLogger(__name__)


class SchemaAssembler:
    """Builds a SchemaDefinition for the schema and tables named in a Config.

    The enum catalog is fetched once per run. Tables are mapped one at a
    time; the first mapping error aborts the run. A missing table ends up
    as an empty definition with a diagnostic on the introspector.
    """

    def __init__(
        self,
        config: Config,
        introspector: DatabaseIntrospector,
        type_mapper: Optional[TypeMapper] = None,
    ):
        self.config = config
        self.introspector = introspector
        self.diagnostics = introspector.diagnostics
        self.type_mapper = type_mapper

    def resolve_config(self) -> Config:
        """Fill in the introspector's default schema when none is configured."""
        if self.config.schema:
            return self.config
        return replace(self.config, schema=self.introspector.get_default_schema())

    def get_table_names(self, schema: str) -> List[str]:
        """Tables from the configured allow-list, else every table in the schema."""
        if self.config.tables:
            return list(self.config.tables)
        return self.introspector.get_schema_tables(schema)

    def assemble(self) -> SchemaDefinition:
        """Introspect and map every target table.

        Returns:
            SchemaDefinition with mapped tables, the enum catalog and the
            custom types named in column annotations
        """
        self.config = self.resolve_config()
        if self.type_mapper is None:
            self.type_mapper = get_type_mapper(self.introspector.dialect, self.config, self.diagnostics)

        schema = self.config.schema
        table_names = self.get_table_names(schema)
        enum_types = self.introspector.get_enums(schema)
        custom_types: Set[str] = set()

        definition = SchemaDefinition(schema=schema, enums=enum_types, custom_types=custom_types)
        for table_name in table_names:
            definition.tables[table_name] = self.assemble_table(
                schema, table_name, enum_types, custom_types
            )

        definition.diagnostics = self.diagnostics.diagnostics
        logger.info(
            "Assembled %d tables and %d enums from %s schema %s",
            len(definition.tables), len(enum_types), self.introspector.dialect, schema,
        )
        return definition

    def assemble_table(
        self,
        schema: str,
        table_name: str,
        enum_types: EnumTypes,
        custom_types: Set[str],
    ) -> TableDefinition:
        """Fetch and map one table. ``custom_types`` is extended in place."""
        table = self.introspector.get_table_definition(schema, table_name)
        if not table:
            return {}
        comments = self.introspector.get_column_comments(schema, table_name)
        return self.type_mapper.map_table(
            table,
            enum_types.keys(),
            custom_types,
            column_comments=comments,
            table_name=table_name,
        )


def generate(config: Config, introspector: DatabaseIntrospector) -> SchemaDefinition:
    """Connect, assemble the schema definition and always release the connection."""
    try:
        introspector.connect()
        return SchemaAssembler(config, introspector).assemble()
    finally:
        introspector.close()
