"""
Provider matching package.

Responsibilities:
- Keep the provider pool loaded from the upstream data source.
- Narrow the pool to providers eligible for a service request.
- Score, badge and rank eligible providers, and pick the top offer per tier.
- Apply the admin approval workflow to provider records.
"""
