"""
Per-service price calculators.

Responsibilities:
- Price cleaning, landscaping and pool quotes for a given pricing tier.
- Split a total into the upfront deposit and the amount due on completion.

Prices are computed independently of match scores and only shown next to them.
"""
