"""Analytics for the jewelry inventory API

This package builds the dashboard report: sales totals, inventory
valuation, category and metal breakdowns, a six-month revenue trend,
top-selling items, customer acquisition and recent activity.

The computation lives in ``engine`` and is a pure function of in-memory
snapshots; ``service`` fetches those snapshots from the record store
concurrently and hands them over. Access requires an authenticated caller
of any role."""
