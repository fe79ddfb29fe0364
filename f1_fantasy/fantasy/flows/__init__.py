"""
Prefect flows for importing race data from FastF1.

Flows handle:
- Task orchestration
- Automatic retries
- Error handling

Structure:
- import_results.py: Race finishing order import and valuation flow
"""
