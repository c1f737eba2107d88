"""
Core Field-List Model Objects

Defines the data structures that flow through the generator:
    - FieldSpec (one typed field)
    - FieldList (the ordered, caller-supplied sequence)
    - Declaration (one emitted record member)
    - Binding (one name/value pair handed to the archive)
    - SerializeRoutine (the single archive call)
    - CompiledFieldList (declarations + routine for one field list)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about C++ or Python syntax
        - Exist only at generation time
        - Preserve caller order everywhere
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional


@dataclass(frozen=True)
class FieldSpec:
    """
    A single (type, name) pair describing one serializable field.

    Properties:
        type:
            Opaque type text exactly as the caller wrote it inside the
            parentheses, e.g. "std::map<int, std::string>"
        name:
            Identifier used both as the member name and, verbatim,
            as the serialization key
    """

    type: str
    name: str


@dataclass
class FieldList:
    """
    Ordered sequence of FieldSpecs.

    Order determines both declaration order and serialization order.

    Properties:
        fields:
            The field specs in caller order
        source:
            Text the list was parsed from (optional, for diagnostics)
    """

    fields: List[FieldSpec] = field(default_factory=list)
    source: Optional[str] = None

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def names(self) -> List[str]:
        return [spec.name for spec in self.fields]

    def types(self) -> List[str]:
        return [spec.type for spec in self.fields]

    def get_field(self, name: str) -> Optional[FieldSpec]:
        """
        Retrieve the first field spec with the given name.

        Args:
            name: Field identifier (case-sensitive)

        Returns:
            FieldSpec or None if not found
        """
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def duplicate_names(self) -> List[str]:
        """Names that appear more than once, in order of first repetition."""
        seen = set()
        duplicates: List[str] = []
        for name in self.names():
            if name in seen and name not in duplicates:
                duplicates.append(name)
            seen.add(name)
        return duplicates


@dataclass(frozen=True)
class Declaration:
    """One record member declaration, equivalent to ``type_name name;``."""

    type_name: str
    name: str


@dataclass(frozen=True)
class Binding:
    """
    A named-value binding handed to the archive.

    Properties:
        key:
            Literal text of the field identifier (the serialization key)
        value:
            Reference to the field holding the value (same identifier)
    """

    key: str
    value: str


@dataclass
class SerializeRoutine:
    """
    The generated serialize body: one archive call with every binding.

    An empty ``bindings`` list is valid and renders as ``archive()``.
    """

    archive: str
    bindings: List[Binding] = field(default_factory=list)

    def keys(self) -> List[str]:
        return [binding.key for binding in self.bindings]


@dataclass
class CompiledFieldList:
    """
    Output of one generation pass.

    INVARIANT:
        [d.name for d in declarations] == routine.keys()
    """

    field_list: FieldList
    declarations: List[Declaration] = field(default_factory=list)
    routine: SerializeRoutine = field(default_factory=lambda: SerializeRoutine(archive="ar"))

    def declared_names(self) -> List[str]:
        return [decl.name for decl in self.declarations]

    def is_synchronized(self) -> bool:
        return self.declared_names() == self.routine.keys()
