"""
Fantasy models module.

This __init__.py imports all models so code can keep using:
from fantasy.models import Driver, Race, UserTeam, etc.

Model organization:
- base.py: Catalog entities (User, Season, Engine, Chassis, Driver) and AssetKind
- events.py: Race calendar and results (Race, RaceResult)
- valuation.py: Valuation lookup table (ValuationTableEntry)
- history.py: Append-only history (PerformanceHistory, AssetValueHistory, RosterCreditHistory)
- rosters.py: User rosters and the betting switch (UserTeam, BettingStatus)
"""

from .base import (
    User,
    AssetKind,
    Season,
    Engine,
    Chassis,
    Driver,
)

from .events import (
    Race,
    RaceResult,
)

from .valuation import (
    ValuationTableEntry,
)

from .history import (
    PerformanceHistory,
    AssetValueHistory,
    RosterCreditHistory,
)

from .rosters import (
    UserTeam,
    BettingStatus,
)

__all__ = [
    # Base models (base.py)
    'User',
    'AssetKind',
    'Season',
    'Engine',
    'Chassis',
    'Driver',
    # Event models (events.py)
    'Race',
    'RaceResult',
    # Valuation table (valuation.py)
    'ValuationTableEntry',
    # History models (history.py)
    'PerformanceHistory',
    'AssetValueHistory',
    'RosterCreditHistory',
    # Roster models (rosters.py)
    'UserTeam',
    'BettingStatus',
]
