"""Transaction Dashboard Service.

This service gives the payment dashboard:
- Transactions created within a date range, with an explicit empty/failed state
- Stat cards (counts by status, completed amount) and daily chart series
- Per-transaction detail merged from the record and its status history
- Fraud listings with a fallback scan of recent transactions
- The last applied date-range filter
"""

__version__ = "0.1.0"
