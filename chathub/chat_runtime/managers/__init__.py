"""Chat runtime managers.

Each manager is constructed once in the app lifespan with the handles it
needs (state store, repositories) and is safe to share across concurrent
handlers.  Managers raise domain exceptions (``SessionValidationError``,
``StateStoreError``) or return ``None`` for absent data -- never HTTP
exceptions, that translation is the router's responsibility.
"""
