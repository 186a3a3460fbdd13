"""
Core pipeline components: models, errors, fetching and orchestration.
"""
