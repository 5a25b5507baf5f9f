"""Domain models: request options, result records and service states.

Nothing here knows about HTTP; wire mapping lives in `adapters`.
"""
