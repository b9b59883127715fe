"""
Provider service.

Layers:
- Domain: Provider entity and domain exceptions
- Repositories: storage contract and its SQL implementation
- Services: business operations over the repository contract
"""

__version__ = "1.0.0"
