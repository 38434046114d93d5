"""Sequelize code generator for model descriptors."""

from typing import Iterable, List

from .. import PACKAGE_NAME, __version__
from ..modeling import AssociationDescriptor, AssociationIndex, ColumnDescriptor, ModelDescriptor
from ..naming import lower_first, plural_name, singular_name


def _quote(value: str) -> str:
    """Single-quote a JavaScript string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class SequelizeCodeGenerator:
    """Generates Sequelize model definitions and the relations module."""

    def __init__(self, typescript: bool = False, indent: str = "\t"):
        self.typescript = typescript
        self.indent = indent

    @property
    def extension(self) -> str:
        return "ts" if self.typescript else "js"

    @property
    def preamble(self) -> str:
        return "\n".join([
            "/* tslint:disable */",
            "/* eslint:disable */",
            f"// autogenerated by {PACKAGE_NAME}@{__version__}",
        ])

    def tab(self, depth: int) -> str:
        return self.indent * depth

    def model_file_name(self, table_name: str) -> str:
        return f"{table_name}.{self.extension}"

    def generate_model(self, model: ModelDescriptor) -> str:
        """Generate the definition module for one model."""
        if self.typescript:
            return self.generate_typescript_model(model)
        return self.generate_javascript_model(model)

    def generate_columns(self, columns: Iterable[ColumnDescriptor]) -> str:
        """Generate the entries of the ``columns`` object literal."""
        blocks = []
        for col in columns:
            attributes = [
                f"field: {_quote(col.field)}",
                f"type: DataTypes.{col.column_type.storage.render()} /* {col.type_comment} */",
                f"primaryKey: {self._bool(col.is_primary_key)}",
                f"allowNull: {self._bool(col.allow_null)}",
                f"autoIncrement: {self._bool(col.auto_increment)}",
            ]
            if col.default.has_value:
                attributes.append(f"defaultValue: {col.default_value}")

            lines = [f"{self.tab(2)}{col.name}: {{"]
            lines.append(",\n".join(f"{self.tab(3)}{attr}" for attr in attributes))
            lines.append(f"{self.tab(2)}}}")
            blocks.append("\n".join(lines))
        return ",\n".join(blocks)

    def _table_options(self, model: ModelDescriptor) -> List[str]:
        return [
            f"{self.tab(1)}tableOptions = tableOptions || {{}};",
            f"{self.tab(1)}tableOptions.freezeTableName = true;",
            f"{self.tab(1)}tableOptions.tableName = {_quote(model.table_name)};",
        ]

    def generate_javascript_model(self, model: ModelDescriptor) -> str:
        prop_docs = ", ".join(f"{col.name}: {col.column_type.doc_type}" for col in model.columns)

        lines = [self.preamble, ""]
        lines.append("module.exports = (/** Sequelize */sequelize, tableOptions) => {")
        lines.append(f"{self.tab(1)}const DataTypes = sequelize.Sequelize.DataTypes;")
        lines.append("")
        lines.extend(self._table_options(model))
        lines.append("")
        lines.append(f"{self.tab(1)}/**")
        lines.append(f"{self.tab(1)} * @name {model.class_name}")
        lines.append(f"{self.tab(1)} * @type {{{{ {prop_docs} }}}}")
        lines.append(f"{self.tab(1)} */")
        lines.append(f"{self.tab(1)}const columns = {{")
        lines.append(self.generate_columns(model.columns))
        lines.append(f"{self.tab(1)}}};")
        lines.append("")
        lines.append(f"{self.tab(1)}return sequelize.define({_quote(model.class_name)}, columns, tableOptions);")
        lines.append("};")
        return "\n".join(lines) + "\n"

    def generate_instance_members(self, associations: Iterable[AssociationDescriptor]) -> List[str]:
        """Generate the association members of the instance interface."""
        members = []
        for assoc in associations:
            target = assoc.target_model
            if assoc.many_to_many:
                plural = plural_name(target)
                singular = singular_name(target)
                members.extend([
                    f"{self.tab(1)}get{plural}: (options?: FindOptions<{target}>) => Promise<{target}[]>",
                    f"{self.tab(1)}set{plural}: ({lower_first(plural)}: {target}[]) => Promise<void>",
                    f"{self.tab(1)}add{singular}: ({lower_first(singular)}: {target}) => Promise<void>",
                    f"{self.tab(1)}add{plural}: ({lower_first(plural)}: {target}[]) => Promise<void>",
                ])
            else:
                prop = assoc.alias or lower_first(target)
                members.append(f"{self.tab(1)}{prop}: {target} | null")
        return members

    def generate_typescript_model(self, model: ModelDescriptor) -> str:
        class_name = model.class_name
        attributes_name = f"{class_name}Attributes"

        sequelize_imports = ["DataTypes", "DefineAttributes", "DefineOptions"]
        if model.has_many_to_many:
            sequelize_imports.append("FindOptions")
        model_imports = [
            f"import {{ {assoc.target_model} }} from './{assoc.target_table}';"
            for assoc in model.associations
        ]

        lines = [self.preamble, ""]
        lines.append("import Sequelize = require('sequelize');")
        lines.append(f"import {{ {', '.join(sequelize_imports)} }} from 'sequelize';")
        lines.append("\n".join(model_imports))
        lines.append("")
        lines.append(f"export interface {attributes_name} {{")
        lines.extend(f"{self.tab(1)}{col.name}: {col.column_type.ts_type}" for col in model.columns)
        lines.append("}")
        lines.append("")
        lines.append(
            f"export interface {class_name} extends Sequelize.Instance<{attributes_name}>, {attributes_name} {{"
        )
        lines.append("\n".join(self.generate_instance_members(model.associations)))
        lines.append("}")
        lines.append("")
        lines.append("export default (")
        lines.append(f"{self.tab(1)}sequelize: Sequelize.Sequelize,")
        lines.append(f"{self.tab(1)}tableOptions?: DefineOptions<{class_name}>")
        lines.append(f"): Sequelize.Model<{class_name}, {attributes_name}> => {{")
        lines.append(f"{self.tab(1)}const DataTypes: DataTypes = sequelize.Sequelize;")
        lines.append("")
        lines.extend(self._table_options(model))
        lines.append("")
        lines.append(f"{self.tab(1)}const columns: DefineAttributes = {{")
        lines.append(self.generate_columns(model.columns))
        lines.append(f"{self.tab(1)}}};")
        lines.append("")
        lines.append(f"{self.tab(1)}return sequelize.define<{class_name}, {attributes_name}>(")
        lines.append(f"{self.tab(2)}{_quote(class_name)},")
        lines.append(f"{self.tab(2)}columns,")
        lines.append(f"{self.tab(2)}tableOptions")
        lines.append(f"{self.tab(1)});")
        lines.append("};")
        return "\n".join(lines) + "\n"

    def generate_relation(self, relation: AssociationDescriptor) -> str:
        """Generate the association call for one foreign-key relation."""
        fk = _quote(relation.foreign_key)
        if relation.many_to_many:
            return (
                f"models.{relation.model}.belongsToMany(models.{relation.target_model}, "
                f"{{ through: models.{relation.through_model}, foreignKey: {fk} }});"
            )
        return (
            f"models.{relation.model}.belongsTo(models.{relation.target_model}, "
            f"{{ foreignKey: {fk}, as: {_quote(relation.alias)} }});"
        )

    def generate_relations(self, index: AssociationIndex) -> str:
        """Generate the module wiring every association."""
        lines = [self.preamble, ""]
        if self.typescript:
            lines.append("import Sequelize = require('sequelize');")
            lines.append("")
            lines.append("export default (sequelize: Sequelize.Sequelize): void => {")
        else:
            lines.append("module.exports = (sequelize) => {")
        lines.append(f"{self.tab(1)}const models = sequelize.models;")

        for relation in index.relations:
            lines.append("")
            if relation.comment:
                lines.append(f"{self.tab(1)}// {relation.comment}")
            lines.append(f"{self.tab(1)}{self.generate_relation(relation)}")

        lines.append("};")
        return "\n".join(lines) + "\n"

    @staticmethod
    def _bool(value: bool) -> str:
        return "true" if value else "false"
