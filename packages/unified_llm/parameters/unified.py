"""Parameter unification engine.

Translates a caller's provider-agnostic option set into the parameter
mapping a specific backend expects. Each engine owns a schema of accepted
fields and the alias, remap and ignore declarations registered for one
provider and request kind.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Set
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of a single accepted field."""

    default: Any = None
    aliases: tuple[str, ...] = ()


FieldDeclaration = FieldSpec | Mapping[str, Any] | None


def value_present(value: Any) -> bool:
    """Return True when ``value`` counts as supplied.

    ``None`` and empty collections are absent. ``False``, ``0`` and ``""``
    are present.
    """
    if value is None:
        return False
    if isinstance(value, (str, bytes)):
        return True
    if isinstance(value, (Mapping, list, tuple, Set)):
        return len(value) > 0
    return True


def _as_names(value: str | Iterable[str] | None) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def _as_field_spec(declaration: FieldDeclaration) -> FieldSpec:
    if isinstance(declaration, FieldSpec):
        return declaration
    if declaration is None:
        return FieldSpec()
    return FieldSpec(
        default=declaration.get("default"),
        aliases=_as_names(declaration.get("aliases")),
    )


class UnifiedParameters:
    """Schema-driven mapping from unified options to provider parameters.

    Registration (``update``, ``alias_field``, ``remap``, ``ignore``) happens
    while an adapter is being built. ``resolve`` then runs, in order: seed
    from the input (unknown keys dropped), alias fill, default fill, remap,
    and prune of ignored fields and remap sources.

    Not thread-safe: ``resolve`` replaces the engine's working state.
    """

    def __init__(
        self,
        schema: Mapping[str, FieldDeclaration] | None = None,
        parameters: Mapping[str, Any] | None = None,
    ) -> None:
        self._schema: dict[str, FieldSpec] = {}
        self._aliases: dict[str, list[str]] = {}
        self._remapped: dict[str, str] = {}
        self._ignored: set[str] = set()
        self._state: dict[str, Any] = {}

        if schema:
            self.update(schema)
        if parameters:
            self.resolve(parameters)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def update(
        self,
        schema: Mapping[str, FieldDeclaration] | None = None,
        **fields: FieldDeclaration,
    ) -> UnifiedParameters:
        """Register or overwrite field declarations.

        Each declaration is a ``FieldSpec`` or a mapping with optional
        ``default`` and ``aliases`` keys. Aliases are merged into the alias
        table; they are never removed by a later declaration.
        """
        declarations = {**(schema or {}), **fields}
        for name, declaration in declarations.items():
            spec = _as_field_spec(declaration)
            self._schema[name] = spec
            for alias in spec.aliases:
                self._add_alias(name, alias)
        return self

    def alias_field(self, field_name: str, as_: str) -> UnifiedParameters:
        """Accept ``as_`` as an alternate input name for ``field_name``."""
        self._schema.setdefault(field_name, FieldSpec())
        self._add_alias(field_name, as_)
        return self

    def remap(
        self,
        field_map: Mapping[str, str] | None = None,
        **pairs: str,
    ) -> UnifiedParameters:
        """Rename canonical fields to provider-native output names.

        The target name shares the canonical field's declaration, so it is
        also accepted as input and receives the same default.
        """
        for field_name, renamed_field in {**(field_map or {}), **pairs}.items():
            self._remapped[field_name] = renamed_field
            self._schema[renamed_field] = self._schema.get(field_name, FieldSpec())
        return self

    def ignore(self, *field_names: str) -> UnifiedParameters:
        """Never emit ``field_names``, whether supplied or defaulted."""
        self._ignored.update(field_names)
        return self

    def _add_alias(self, field_name: str, alias: str) -> None:
        aliases = self._aliases.setdefault(field_name, [])
        if alias not in aliases:
            aliases.append(alias)

    @property
    def schema(self) -> Mapping[str, FieldSpec]:
        return MappingProxyType(self._schema)

    @property
    def aliases(self) -> dict[str, tuple[str, ...]]:
        return {name: tuple(names) for name, names in self._aliases.items()}

    @property
    def remapped(self) -> Mapping[str, str]:
        return MappingProxyType(self._remapped)

    @property
    def ignored(self) -> frozenset[str]:
        return frozenset(self._ignored)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, parameters: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Build the provider-ready parameters for one request.

        The caller's mapping is copied, never mutated. Values from a
        previous call are discarded.
        """
        source = dict(parameters or {})

        dropped = [name for name in source if name not in self._schema]
        if dropped:
            logger.debug("Dropping unsupported parameters: %s", sorted(map(str, dropped)))

        state = {name: value for name, value in source.items() if name in self._schema}

        for field_name, alias_names in self._aliases.items():
            if value_present(state.get(field_name)):
                continue
            for alias in alias_names:
                if value_present(source.get(alias)):
                    state[field_name] = source[alias]
                    break

        for field_name, spec in self._schema.items():
            if not value_present(state.get(field_name)) and value_present(spec.default):
                state[field_name] = spec.default

        for field_name, renamed_field in self._remapped.items():
            if value_present(state.get(field_name)):
                state[renamed_field] = state[field_name]

        for field_name in self._ignored:
            state.pop(field_name, None)

        self._state = state
        resolved = self.to_dict()
        logger.debug("Resolved parameters: %s", list(resolved))
        return resolved

    def to_dict(self) -> dict[str, Any]:
        """Return the resolved output: remap sources and unset values omitted."""
        return {
            name: value
            for name, value in self._state.items()
            if name not in self._remapped and value is not None
        }

    # ------------------------------------------------------------------
    # Field access
    # ------------------------------------------------------------------

    def _synonyms(self, field_name: str) -> list[str]:
        names = [field_name]
        for canonical, alias_names in self._aliases.items():
            if field_name in alias_names and canonical not in names:
                names.append(canonical)
        for name in list(names):
            for original, renamed in self._remapped.items():
                if name in (original, renamed):
                    for partner in (original, renamed):
                        if partner not in names:
                            names.append(partner)
        return names

    def __getitem__(self, field_name: str) -> Any:
        return self._state[field_name]

    def get(self, field_name: str, default: Any = None) -> Any:
        return self._state.get(field_name, default)

    def __setitem__(self, field_name: str, value: Any) -> None:
        # Keep aliases and remap partners in sync until the next resolve.
        for name in self._synonyms(field_name):
            if name in self._schema and name not in self._ignored:
                self._state[name] = value

    def __contains__(self, field_name: object) -> bool:
        return field_name in self.to_dict()

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def __len__(self) -> int:
        return len(self.to_dict())

    def items(self):
        return self.to_dict().items()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UnifiedParameters):
            return self.to_dict() == other.to_dict()
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"
