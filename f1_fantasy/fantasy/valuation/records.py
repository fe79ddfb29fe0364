"""
Typed records describing the outcome of a valuation pass.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Union

from fantasy.models import AssetKind


@dataclass(frozen=True)
class AssetValuationResult:
    kind: AssetKind
    asset_id: int
    percent: Union[Decimal, int]
    amount: int
    old_value: int
    new_value: int


@dataclass(frozen=True)
class RosterCreditResult:
    user_team_id: int
    credits_gained: int
    old_credits: int
    new_credits: int


@dataclass
class ValuationReport:
    race_id: int
    drivers: List[AssetValuationResult] = field(default_factory=list)
    engines: List[AssetValuationResult] = field(default_factory=list)
    chassis: List[AssetValuationResult] = field(default_factory=list)
    rosters: List[RosterCreditResult] = field(default_factory=list)

    def for_kind(self, kind):
        return {
            AssetKind.DRIVER: self.drivers,
            AssetKind.ENGINE: self.engines,
            AssetKind.CHASSIS: self.chassis,
        }[kind]

    def find(self, kind, asset_id):
        for result in self.for_kind(kind):
            if result.asset_id == asset_id:
                return result
        return None

    def summary(self):
        """Counts and totals used for logging and notifications"""
        return {
            'race_id': self.race_id,
            'drivers_valued': len(self.drivers),
            'engines_valued': len(self.engines),
            'chassis_valued': len(self.chassis),
            'rosters_updated': len(self.rosters),
            'credits_distributed': sum(r.credits_gained for r in self.rosters),
        }
