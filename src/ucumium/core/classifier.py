"""
ucumium.core.classifier
=======================

Recognises multiplicative converters that are really metric prefixes.

Unit arithmetic tends to produce plain ``Multiply``/``Rational`` converters
(``m * 0.001``). Before such a converter is formatted it is passed through
:meth:`PrefixClassifier.classify`, which swaps it for the equivalent
``PowerOfTen`` so it can be written as a glued prefix (``mm``) rather than
as a numeric factor.
"""

from __future__ import annotations

import logging
import threading
from fractions import Fraction
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from ucumium.core.converter import Converter, Multiply, PowerOfTen, Rational
from ucumium.core.utils import rationalize
from ucumium.units.prefixes import PREFIXES, Prefix

logger = logging.getLogger(__name__)


class PrefixClassifier:
    """
    Maps prefix-valued factors to ``PowerOfTen`` converters.

    The factor table is a pure function of the prefix set. It is built on
    first use under a lock and is read-only afterwards.
    """

    def __init__(self, prefixes: Iterable[Prefix] = PREFIXES) -> None:
        self._prefixes: Tuple[Prefix, ...] = tuple(prefixes)
        self._lock = threading.Lock()
        self._by_factor: Optional[Mapping[Fraction, PowerOfTen]] = None

    @property
    def prefixes(self) -> Tuple[Prefix, ...]:
        return self._prefixes

    def classify(self, converter: Converter) -> Converter:
        """Return the prefix converter equal to ``converter``, or ``converter`` itself."""
        if isinstance(converter, PowerOfTen):
            return converter
        if not isinstance(converter, (Multiply, Rational)):
            return converter

        key = rationalize(converter.factor)
        return self._table().get(key, converter)

    def is_prefix_factor(self, factor: Fraction) -> bool:
        return factor in self._table()

    # ------------------------- internals -----------------------------------
    def _table(self) -> Mapping[Fraction, PowerOfTen]:
        table = self._by_factor
        if table is not None:
            return table
        with self._lock:
            if self._by_factor is None:
                self._by_factor = MappingProxyType(self._build())
            return self._by_factor

    def _build(self) -> Dict[Fraction, PowerOfTen]:
        table: Dict[Fraction, PowerOfTen] = {}
        for prefix in self._prefixes:
            table[prefix.factor] = prefix.converter
        logger.debug("Built prefix factor table with %d entries", len(table))
        return table


# Process-wide default, shared by the default formats.
DEFAULT_CLASSIFIER = PrefixClassifier()


__all__ = ["PrefixClassifier", "DEFAULT_CLASSIFIER"]
