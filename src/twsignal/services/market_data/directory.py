"""Stock names and the scannable universe, backed by twstock's code table."""

from typing import Dict, List, Mapping, Optional

import twstock

from ...config.logging import get_logger

logger = get_logger(__name__)

UNKNOWN_NAME = "未知"
COMMON_STOCK = "股票"
MARKETS = ("上市", "上櫃")


class StockDirectory:
    """Looks up display names and lists listed/OTC common stocks."""

    def __init__(
        self,
        codes: Optional[Mapping] = None,
        overrides: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            codes: Code table shaped like ``twstock.codes`` (defaults to it)
            overrides: Names that win over the code table
        """
        self._codes = twstock.codes if codes is None else codes
        self._overrides = overrides or {}
        self.logger = logger.bind(component="stock_directory")

    def get_name(self, code: str) -> str:
        """Display name for a code, or ``UNKNOWN_NAME``."""
        if code in self._overrides:
            return self._overrides[code]

        info = self._codes.get(code)
        if info is None:
            self.logger.debug("Unknown stock code", code=code)
            return UNKNOWN_NAME
        return info.name

    def listed_codes(self) -> List[str]:
        """Every common stock on the listed and OTC markets."""
        return sorted(
            code
            for code, info in self._codes.items()
            if info.type == COMMON_STOCK and info.market in MARKETS
        )
