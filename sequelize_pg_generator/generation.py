"""Generation run: introspect, transform and write Sequelize files.

The run has two phases. All foreign keys are resolved first, because a
table's associations are only known once every foreign key of the schema has
been seen; the relations file is written at the end of that phase. Model
definitions are then generated table by table, each file written before the
next table is queried. A failure stops the run; files already written stay
on disk.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .database import CatalogIntrospector
from .errors import ConfigurationError, OutputError
from .logging import RunContext
from .modeling import AssociationIndex, ModelDescriptor, assemble_model, build_columns, resolve_associations
from .sequelize import SequelizeCodeGenerator

logger = logging.getLogger(__name__)


@dataclass
class GenerationOptions:
    """Output options for a generation run."""
    models_dir: Path
    relations_file: Path
    typescript: bool = False
    indent: str = "\t"
    include_foreign_keys: bool = False
    camel_case: bool = False


def relations_file_path(relations_file: Path, typescript: bool = False) -> Path:
    """Append the module extension when the relations file has none."""
    relations_file = Path(relations_file)
    if relations_file.suffix:
        return relations_file
    extension = ".ts" if typescript else ".js"
    return relations_file.with_name(relations_file.name + extension)


def validate_output_paths(options: GenerationOptions) -> None:
    """Check that both output locations exist before anything is queried.

    Raises:
        ConfigurationError: If the models directory or the relations file's
            parent directory is missing
    """
    models_dir = Path(options.models_dir)
    if not models_dir.is_dir():
        raise ConfigurationError(
            f'directory "{models_dir.resolve()}" does not exist',
            details={"models_dir": str(models_dir)},
        )
    relations_file = Path(options.relations_file)
    if not relations_file.resolve().parent.is_dir():
        raise ConfigurationError(
            f'"{relations_file.resolve()}" has no parent directory',
            details={"relations_file": str(relations_file)},
        )


class ModelGenerator:
    """Runs both generation phases against one introspector."""

    def __init__(
        self,
        introspector: CatalogIntrospector,
        options: GenerationOptions,
        context: Optional[RunContext] = None,
    ):
        self.introspector = introspector
        self.options = options
        self.context = context or RunContext()
        self.code_generator = SequelizeCodeGenerator(
            typescript=options.typescript,
            indent=options.indent,
        )

    @property
    def relations_path(self) -> Path:
        return relations_file_path(self.options.relations_file, self.options.typescript)

    def run(self) -> List[ModelDescriptor]:
        """Generate the relations file, then every model definition."""
        logger.info("starting association generation")
        index = self.generate_associations()
        logger.info("starting definition generation")
        return self.generate_definitions(index)

    def generate_associations(self) -> AssociationIndex:
        """Resolve all foreign keys and write the relations file."""
        rows = self.introspector.get_foreign_keys()
        index = resolve_associations(rows)
        self.context.relations_count = len(index.relations)

        logger.info("writing associations to %s", self.relations_path)
        self._write(self.relations_path, self.code_generator.generate_relations(index))
        return index

    def generate_definitions(self, index: AssociationIndex) -> List[ModelDescriptor]:
        """Generate and write one model definition per table, in catalog order."""
        tables = self.introspector.get_tables()
        self.context.tables_count = len(tables)

        models = []
        for table in tables:
            models.append(self.generate_definition(table, index))
        return models

    def generate_definition(self, table: str, index: AssociationIndex) -> ModelDescriptor:
        logger.info("starting generation for %s", table)
        rows = self.introspector.get_columns(table)
        columns = build_columns(
            rows,
            include_foreign_keys=self.options.include_foreign_keys,
            camel_case=self.options.camel_case,
        )
        self.context.columns_count += len(columns)

        model = assemble_model(table, columns, index)
        target = Path(self.options.models_dir) / self.code_generator.model_file_name(table)
        logger.info("writing definition to %s", target)
        self._write(target, self.code_generator.generate_model(model))
        return model

    def _write(self, path: Path, content: str) -> None:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputError(str(path), e.strerror or str(e)) from e
        self.context.files_written.append(str(path))
