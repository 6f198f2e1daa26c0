"""Process exit codes returned by ``habitpro`` commands.

Typer's own usage errors (bad option, value out of range) also exit with 2,
so ``ERROR_INVALID_ARGS`` covers both those and values rejected by model
validation.
"""

ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2
ERROR_NOT_FOUND = 5
# Vault unreadable or still locked after retries
ERROR_STORAGE = 7
