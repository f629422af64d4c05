# Infrastructure clients
from clients.vault_client import (
    VaultClient,
    VaultError,
    get_database_url,
    get_statement_timeout_ms,
)
from clients.postgres_client import PostgresClient
