"""
Errors raised by the valuation engine and results submission.
"""


class ValuationError(Exception):
    """Base class for valuation failures reported to the administrator"""


class RaceNotFoundError(ValuationError):
    def __init__(self, race_id):
        self.race_id = race_id
        super().__init__(f"Race with id {race_id} not found")


class NoResultsError(ValuationError):
    def __init__(self, race_id):
        self.race_id = race_id
        super().__init__(f"No results found for race {race_id}")


class InvalidResultsError(ValuationError):
    """Submitted finishing order is malformed (gaps, duplicates, unknown drivers)"""
