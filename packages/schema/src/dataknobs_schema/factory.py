"""Build schema trees from configuration dictionaries and files."""

import copy
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

from dataknobs_common import Registry
from dataknobs_config import Config, FactoryBase

from . import steps
from .algebra import extend
from .base import Schema
from .coercion import coerce, to_date
from .composites import list_of, obj, record, tuple_of, union
from .errors import SchemaConfigurationError
from .modifiers import default, opt
from .pipeline import Pipe, pipe
from .primitives import boolean, date, enum, literal, number, one_of, string, unknown

logger = logging.getLogger(__name__)

StepFactory = Callable[..., Pipe[Any]]

COMMON_KEYS = {"type", "message", "coerce", "optional", "default", "steps", "name", "description"}

TYPE_KEYS: Dict[str, set] = {
    "string": set(),
    "number": set(),
    "boolean": set(),
    "date": set(),
    "unknown": set(),
    "literal": {"value"},
    "enum": {"values"},
    "one_of": {"values"},
    "list": {"items"},
    "tuple": {"items"},
    "union": {"options"},
    "object": {"props", "extends"},
    "record": {"key", "value"},
}

TYPE_ALIASES = {
    "str": "string",
    "num": "number",
    "bool": "boolean",
    "any": "unknown",
    "oneOf": "one_of",
    "obj": "object",
    "array": "list",
}

DATE_STEPS = {"before", "after", "between"}


class StepRegistry(Registry[StepFactory]):
    """Named pipeline step factories available to configuration.

    Pre-loaded with every step in ``dataknobs_schema.steps``.
    """

    def __init__(self) -> None:
        super().__init__("schema_steps")
        for name in (
            "min_len",
            "max_len",
            "trim",
            "upcase",
            "lowcase",
            "pattern",
            "not_empty",
            "min_value",
            "max_value",
            "in_range",
            "clamp",
            "integer",
            "positive",
            "negative",
            "before",
            "after",
            "between",
            "email",
            "uuid",
        ):
            self.register(name, getattr(steps, name))

    def register_step(self, name: str, factory: StepFactory) -> None:
        """Register or replace a step factory.

        Args:
            name: Name used in ``steps`` entries
            factory: Callable returning a pipeline step
        """
        self.register(name, factory, allow_overwrite=True)


class SchemaFactory(FactoryBase):
    """Factory for creating schemas from configuration.

    Configuration Options:
        type (str): string, number, boolean, date, unknown, literal, enum,
            one_of, list, tuple, union, object or record
        message (str): Override error message
        coerce (bool): Cast the input first (number/string/boolean/date only)
        steps (list): Pipeline steps, each a name or a mapping with
            ``name``, ``args``, ``kwargs`` and ``message``
        optional (bool): Accept absent values
        default (any): Value used when the input is absent

    Type-specific Options:
        literal: ``value``
        enum / one_of: ``values`` (a mapping for enum, a list for one_of)
        list: ``items`` (a schema node)
        tuple: ``items`` (a list of schema nodes)
        union: ``options`` (a list of schema nodes)
        object: ``props`` (mapping of name to schema node), ``extends``
            (list of object nodes merged before ``props``)
        record: ``key`` and ``value`` (schema nodes)

    Example Configuration:
        type: object
        props:
          username:
            type: string
            steps:
              - trim
              - name: min_len
                args: [3]
          age:
            type: number
            coerce: true
            steps:
              - name: in_range
                args: [13, 120]
          role:
            type: one_of
            values: [admin, user]
            default: user
    """

    def __init__(self, step_registry: StepRegistry | None = None):
        self.step_registry = step_registry or StepRegistry()

    def create(self, **config: Any) -> Schema[Any]:
        """Create a schema from a configuration node.

        Args:
            **config: Schema configuration

        Returns:
            Schema instance

        Raises:
            SchemaConfigurationError: If the configuration is invalid
        """
        logger.info(f"Creating schema: {config.get('name', config.get('type', 'unnamed'))}")
        return self.build(config)

    def build(self, node: Any, path: str = "$") -> Schema[Any]:
        """Recursively build a schema from a configuration node.

        Args:
            node: Mapping describing the schema, or a bare type name
            path: Location of the node, used in error messages

        Returns:
            Schema instance
        """
        if isinstance(node, str):
            node = {"type": node}
        if not isinstance(node, dict):
            raise SchemaConfigurationError(
                f"Schema node at {path} must be a mapping or a type name",
                context={"path": path, "node": repr(node)},
            )

        type_name = node.get("type")
        if not type_name:
            raise SchemaConfigurationError(
                f"Schema node at {path} is missing 'type'", context={"path": path}
            )
        type_name = TYPE_ALIASES.get(type_name, type_name)
        if type_name not in TYPE_KEYS:
            raise SchemaConfigurationError(
                f"Unknown schema type '{type_name}' at {path}",
                context={"path": path, "available": sorted(TYPE_KEYS)},
            )

        for key in node:
            if key not in COMMON_KEYS and key not in TYPE_KEYS[type_name]:
                logger.warning(f"Ignoring unknown key '{key}' in schema node at {path}")

        if node.get("optional") and "default" in node:
            raise SchemaConfigurationError(
                f"Schema node at {path} cannot be both optional and defaulted",
                context={"path": path},
            )

        schema = self._build_base(type_name, node, path)

        if node.get("coerce"):
            schema = coerce(schema)

        pipeline = self._build_steps(node.get("steps", []), path)
        if pipeline:
            schema = pipe(schema, *pipeline)

        if node.get("optional"):
            schema = opt(schema)
        elif "default" in node:
            fallback = node["default"]
            schema = default(schema, fallback, factory=lambda: copy.deepcopy(fallback))

        return schema

    def _build_base(self, type_name: str, node: Dict[str, Any], path: str) -> Schema[Any]:
        message = node.get("message")

        if type_name == "string":
            return string(message)
        elif type_name == "number":
            return number(message)
        elif type_name == "boolean":
            return boolean(message)
        elif type_name == "date":
            return date(message)
        elif type_name == "unknown":
            return unknown()
        elif type_name == "literal":
            return literal(self._require(node, "value", path), message)
        elif type_name == "enum":
            values = self._require(node, "values", path)
            if isinstance(values, list):
                values = {str(value): value for value in values}
            return enum(values, message)
        elif type_name == "one_of":
            return one_of(self._require(node, "values", path), message)
        elif type_name == "list":
            return list_of(self.build(self._require(node, "items", path), f"{path}[]"), message)
        elif type_name == "tuple":
            items = self._require(node, "items", path)
            return tuple_of(
                [self.build(item, f"{path}[{i}]") for i, item in enumerate(items)], message
            )
        elif type_name == "union":
            options = self._require(node, "options", path)
            return union(
                [self.build(option, f"{path}|{i}") for i, option in enumerate(options)], message
            )
        elif type_name == "object":
            return self._build_object(node, path, message)
        else:
            key = self.build(self._require(node, "key", path), f"{path}.<key>")
            value = self.build(self._require(node, "value", path), f"{path}.<value>")
            return record(key, value, message)

    def _build_object(self, node: Dict[str, Any], path: str, message: str | None) -> Schema[Any]:
        bases = [
            self.build(base, f"{path}<{i}>") for i, base in enumerate(node.get("extends", []))
        ]
        props = {
            key: self.build(child, f"{path}.{key}")
            for key, child in (node.get("props") or {}).items()
        }
        if bases:
            return extend([*bases, obj(props)], message)
        return obj(props, message)

    def _build_steps(self, step_configs: List[Any], path: str) -> List[Pipe[Any]]:
        """Build pipeline steps from configuration.

        Args:
            step_configs: Step names or step mappings
            path: Location of the owning node

        Returns:
            List of steps, in order
        """
        built = []
        for config in step_configs:
            if isinstance(config, str):
                config = {"name": config}
            name = config.get("name")
            if not name or not self.step_registry.has(name):
                raise SchemaConfigurationError(
                    f"Unknown step '{name}' at {path}",
                    context={"path": path, "available": self.step_registry.list_keys()},
                )

            args = list(config.get("args", []))
            kwargs = dict(config.get("kwargs", {}))
            if "message" in config:
                kwargs["message"] = config["message"]
            if name in DATE_STEPS:
                args = [to_date(arg) for arg in args]

            try:
                built.append(self.step_registry.get(name)(*args, **kwargs))
            except TypeError as e:
                raise SchemaConfigurationError(
                    f"Invalid arguments for step '{name}' at {path}: {e}",
                    context={"path": path, "step": name},
                ) from e
        return built

    @staticmethod
    def _require(node: Dict[str, Any], key: str, path: str) -> Any:
        if key not in node:
            raise SchemaConfigurationError(
                f"Schema node at {path} of type '{node['type']}' requires '{key}'",
                context={"path": path, "key": key},
            )
        return node[key]


def load_schemas(
    *sources: Union[str, Path, dict],
    factory: SchemaFactory | None = None,
) -> Dict[str, Schema[Any]]:
    """Build every schema declared under ``schemas`` in config sources.

    Each entry of the ``schemas`` list carries a ``name`` and a ``schema``
    node, for example in YAML:

        schemas:
          - name: user
            schema:
              type: object
              props:
                name: string

    Args:
        *sources: YAML/JSON file paths or dictionaries, as accepted by Config
        factory: Factory to build with (defaults to ``schema_factory``)

    Returns:
        Mapping of schema name to schema
    """
    factory = factory or schema_factory
    config = Config(*sources, use_env=False)
    if "schemas" not in config.get_types():
        logger.warning("No 'schemas' section found in configuration")
        return {}

    schemas = {}
    for name in config.get_names("schemas"):
        entry = config.get("schemas", name)
        if "schema" not in entry:
            raise SchemaConfigurationError(
                f"Schema entry '{name}' has no 'schema' node", context={"name": name}
            )
        logger.info(f"Creating schema: {name}")
        schemas[name] = factory.build(entry["schema"], name)
    return schemas


# Create singleton instance for registration
schema_factory = SchemaFactory()
