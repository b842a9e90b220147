"""DataKnobs Schema package.

Composable validation for untrusted input: a schema checks an untyped value
and returns either the typed value or a single location-aware ParseError.

Example:
    ```python
    import dataknobs_schema as s
    from dataknobs_schema import steps

    user = s.obj({
        "name": s.pipe(s.string(), steps.trim(), steps.min_len(1)),
        "age": s.coerce(s.number()),
        "email": s.opt(s.pipe(s.string(), steps.email())),
    })

    result = user.parse({"name": "Jane", "age": "30"})
    if result.is_ok():
        print(result.unwrap())
    else:
        print(result.unwrap_err().to_dict())
    ```
"""

from . import steps
from .algebra import exclude, extend, partial, required, select
from .base import Schema
from .coercion import coerce
from .composites import (
    ListSchema,
    ObjectSchema,
    RecordSchema,
    TupleSchema,
    UnionSchema,
    list_of,
    obj,
    record,
    tuple_of,
    union,
)
from .errors import (
    ParseError,
    SchemaConfigurationError,
    SchemaError,
    SchemaValidationError,
    err,
    type_of,
)
from .factory import SchemaFactory, StepRegistry, load_schemas, schema_factory
from .modifiers import DefaultSchema, OptionalSchema, default, opt
from .option import NOTHING, Nothing, Option, Some
from .pipeline import Pipe, pipe, transform
from .primitives import (
    boolean,
    date,
    enum,
    literal,
    number,
    one_of,
    string,
    unknown,
)
from .result import Err, Ok, Result
from .sequence import Seq

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "Schema",
    "ParseError",
    "err",
    "type_of",
    # Exceptions
    "SchemaError",
    "SchemaConfigurationError",
    "SchemaValidationError",
    # Result types
    "Ok",
    "Err",
    "Result",
    "Some",
    "Nothing",
    "NOTHING",
    "Option",
    "Seq",
    # Primitives
    "string",
    "number",
    "boolean",
    "date",
    "unknown",
    "literal",
    "enum",
    "one_of",
    "coerce",
    # Composites
    "list_of",
    "tuple_of",
    "union",
    "obj",
    "record",
    "ListSchema",
    "TupleSchema",
    "UnionSchema",
    "ObjectSchema",
    "RecordSchema",
    # Object algebra
    "extend",
    "select",
    "exclude",
    "partial",
    "required",
    # Modifiers
    "opt",
    "default",
    "OptionalSchema",
    "DefaultSchema",
    # Pipeline
    "Pipe",
    "pipe",
    "transform",
    "steps",
    # Configuration
    "SchemaFactory",
    "StepRegistry",
    "schema_factory",
    "load_schemas",
]
