"""
Parser Registry

Holds the field parsers of one orchestrator under unique names, compiles
their declared patterns at registration time and computes the execution
order. Parsers may declare ``depends_on``; the order is a topological sort
with ties broken by registration order, so a registry without declared
dependencies runs in registration order.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ...exceptions.parser_exceptions import (
    DuplicateParserError,
    InvalidParserError,
    ParserDependencyError,
)
from .patterns import PatternCompiler, PatternSet, default_compiler

logger = logging.getLogger(__name__)


class ParserRegistry:
    """Registry of field parsers keyed by field name."""

    def __init__(self, compiler: Optional[PatternCompiler] = None):
        """Initialize empty registry.

        Args:
            compiler: Pattern compiler used at registration (default: process-wide)
        """
        self.compiler = compiler or default_compiler
        self._parsers: Dict[str, Any] = {}
        self._patterns: Dict[str, PatternSet] = {}
        self._order: Optional[List[str]] = None

    def register(self, name: str, parser: Any) -> None:
        """Register a field parser under a unique name.

        Args:
            name: Field name; must not already be registered
            parser: Object with a callable ``parse(text, patterns)``

        Raises:
            InvalidParserError: If name is empty or parser lacks ``parse``
            DuplicateParserError: If name is already registered
            ParserDependencyError: If the parser's dependencies form a cycle
        """
        if not name or not isinstance(name, str):
            raise InvalidParserError(f"Invalid parser name: {name!r}", None)

        if not callable(getattr(parser, "parse", None)):
            raise InvalidParserError(f"Invalid parser: {name} must have a parse method", name)

        if name in self._parsers:
            raise DuplicateParserError(name)

        self._parsers[name] = parser
        self._order = None

        try:
            self.execution_order()
        except ParserDependencyError:
            del self._parsers[name]
            self._order = None
            raise

        self._patterns[name] = self.compiler.compile(name, getattr(parser, "patterns", None))
        logger.info("Parser registered: %s", name)

    def unregister(self, name: str) -> None:
        """Remove a parser. Its compiled patterns stay in the compiler cache."""
        if name in self._parsers:
            del self._parsers[name]
            self._patterns.pop(name, None)
            self._order = None
            logger.info("Parser unregistered: %s", name)

    def get(self, name: str) -> Optional[Any]:
        return self._parsers.get(name)

    def get_patterns(self, name: str) -> PatternSet:
        return self._patterns.get(name) or PatternSet(name)

    def names(self) -> List[str]:
        """Registered names in registration order."""
        return list(self._parsers)

    def items(self) -> Iterator[Tuple[str, Any]]:
        """(name, parser) pairs in execution order."""
        for name in self.execution_order():
            yield name, self._parsers[name]

    def execution_order(self) -> List[str]:
        """Compute, once per registry state, the order parsers run in."""
        if self._order is None:
            self._order = self._topological_order()
        return list(self._order)

    def _dependencies(self, name: str) -> List[str]:
        declared = getattr(self._parsers[name], "depends_on", None) or ()
        if isinstance(declared, str):
            declared = (declared,)

        deps = []
        for dep in declared:
            if dep == name:
                raise ParserDependencyError(name, [name, name])
            if dep in self._parsers:
                deps.append(dep)
            else:
                logger.debug("Parser %s depends on unregistered parser %s, ignoring", name, dep)
        return deps

    def _topological_order(self) -> List[str]:
        registration = list(self._parsers)
        deps = {name: self._dependencies(name) for name in registration}
        remaining = {name: len(d) for name, d in deps.items()}
        dependents: Dict[str, List[str]] = {name: [] for name in registration}
        for name, d in deps.items():
            for dep in d:
                dependents[dep].append(name)

        order: List[str] = []
        ready = [name for name in registration if remaining[name] == 0]
        position = {name: i for i, name in enumerate(registration)}

        while ready:
            # Earliest registered among the ready parsers runs first
            ready.sort(key=position.__getitem__)
            current = ready.pop(0)
            order.append(current)
            for dependent in dependents[current]:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    ready.append(dependent)

        if len(order) != len(registration):
            blocked = [name for name in registration if name not in order]
            raise ParserDependencyError(blocked[-1], self._find_cycle(blocked, deps))

        return order

    def _find_cycle(self, blocked: List[str], deps: Dict[str, List[str]]) -> List[str]:
        path: List[str] = []
        current = blocked[0]
        while current not in path:
            path.append(current)
            current = next(dep for dep in deps[current] if dep in blocked)
        return path[path.index(current):] + [current]

    def describe(self) -> List[Dict[str, Any]]:
        """Describe registered parsers in execution order."""
        described = []
        for name, parser in self.items():
            patterns = self.get_patterns(name)
            described.append({
                "name": name,
                "parser": type(parser).__name__,
                "patterns": list(patterns),
                "depends_on": self._dependencies(name),
            })
        return described

    def __contains__(self, name: str) -> bool:
        return name in self._parsers

    def __len__(self) -> int:
        return len(self._parsers)
