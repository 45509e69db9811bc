"""pbtfun: shrinkable, printable generated functions for property-based testing."""

from .either import UNIT, Either, Left, Right
from .option import Option, Some
from .pfun import (
    IMap,
    OnLeft,
    OnRight,
    PFun,
    Product,
    Union,
    Unit,
    Void,
    imap,
    left,
    lookup,
    product,
    right,
    shrink,
    size,
    table,
    union,
    unit,
    void,
)
from .argument import (
    Argument,
    Deferred,
    encode,
    booleans,
    characters,
    dataclasses_of,
    deferred,
    eithers,
    enumeration,
    integers,
    lists,
    mapped,
    optionals,
    pairs,
    strings,
    tuples,
    units,
)
from .registry import DEFAULT_REGISTRY, Registry, resolve
from .fun import Fun, Partial, Total, apply, encoding_of, render, shrinker
from .fun import shrink as shrink_fun
from .show import show
from .result import Ok, Err, Result

__all__ = [
    # Values
    "UNIT", "Either", "Left", "Right", "Option", "Some",
    # Encoding
    "IMap", "OnLeft", "OnRight", "PFun", "Product", "Union", "Unit", "Void",
    "imap", "left", "lookup", "product", "right", "shrink", "size", "table",
    "union", "unit", "void",
    # Capabilities
    "Argument", "Deferred", "encode", "booleans", "characters", "dataclasses_of",
    "deferred", "eithers", "enumeration", "integers", "lists", "mapped",
    "optionals", "pairs", "strings", "tuples", "units",
    # Registry
    "DEFAULT_REGISTRY", "Registry", "resolve",
    # Functions
    "Fun", "Partial", "Total", "apply", "encoding_of", "render", "shrink_fun",
    "shrinker",
    # Rendering
    "show",
    # Result
    "Ok", "Err", "Result",
]
