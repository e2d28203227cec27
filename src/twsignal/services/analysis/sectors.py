"""Built-in sector watchlists."""

from typing import Dict, List

from ...core.exceptions import UnknownSectorError
from .models import SectorInfo

SECTORS: Dict[str, SectorInfo] = {
    sector.id: sector
    for sector in (
        SectorInfo(
            id="semiconductor",
            name="半導體",
            codes=("2330", "2454", "2303", "3711", "2379", "3034", "2408", "6415"),
        ),
        SectorInfo(
            id="ai_server",
            name="AI 伺服器",
            codes=("2382", "3231", "6669", "2356", "2317", "3017", "2376"),
        ),
        SectorInfo(
            id="shipping",
            name="航運",
            codes=("2603", "2609", "2615", "2618", "2610"),
        ),
        SectorInfo(
            id="finance",
            name="金融",
            codes=("2881", "2882", "2891", "2886", "2884", "2892"),
        ),
        SectorInfo(
            id="etf",
            name="ETF",
            codes=("0050", "0056", "00878", "006208"),
        ),
    )
}


def list_sectors() -> List[SectorInfo]:
    return list(SECTORS.values())


def get_sector(sector_id: str) -> SectorInfo:
    """Look up a sector by id."""
    try:
        return SECTORS[sector_id]
    except KeyError:
        raise UnknownSectorError(sector_id) from None
