"""DuckDB connection and schema for profiles, conversations and workflows."""

from pathlib import Path
from typing import Optional

import duckdb

from ..utils.logger import get_app_logger


SEQUENCES = ("users_id_seq", "integrations_id_seq", "metrics_id_seq", "chat_messages_id_seq")

TABLES = {
    "users": """
        id BIGINT PRIMARY KEY,
        email VARCHAR NOT NULL UNIQUE,
        first_name VARCHAR,
        last_name VARCHAR,
        company VARCHAR,
        company_name VARCHAR,
        role VARCHAR,
        created_at TIMESTAMP NOT NULL
    """,
    # api_key holds the Bitrix24 webhook URL for CRM integrations
    "integrations": """
        id BIGINT PRIMARY KEY,
        user_id BIGINT NOT NULL,
        service VARCHAR NOT NULL,
        service_name VARCHAR NOT NULL,
        api_url VARCHAR,
        api_key VARCHAR,
        is_active BOOLEAN DEFAULT TRUE,
        created_at TIMESTAMP NOT NULL
    """,
    "dashboard_metrics": """
        id BIGINT PRIMARY KEY,
        user_id BIGINT NOT NULL,
        metric_type VARCHAR NOT NULL,
        value BIGINT NOT NULL,
        change BIGINT,
        period VARCHAR NOT NULL,
        data JSON,
        updated_at TIMESTAMP NOT NULL
    """,
    "chat_messages": """
        id BIGINT PRIMARY KEY,
        user_id BIGINT NOT NULL,
        message VARCHAR NOT NULL,
        response VARCHAR,
        timestamp TIMESTAMP NOT NULL
    """,
    # Confirmed automations; the synthesized workflow is kept as JSON
    "workflows": """
        id VARCHAR PRIMARY KEY,
        user_id BIGINT NOT NULL,
        name VARCHAR NOT NULL,
        description VARCHAR,
        definition JSON NOT NULL,
        is_active BOOLEAN DEFAULT FALSE,
        created_at TIMESTAMP NOT NULL
    """,
}

INDEXES = (
    ("idx_integrations_user", "integrations", "user_id"),
    ("idx_metrics_user", "dashboard_metrics", "user_id"),
    ("idx_chat_messages_user", "chat_messages", "user_id"),
    ("idx_chat_messages_timestamp", "chat_messages", "timestamp"),
    ("idx_workflows_user", "workflows", "user_id"),
)


class DatabaseConnection:
    """
    Owns the single DuckDB connection shared by all repositories.

    The schema is created idempotently on construction, so pointing at an
    existing file is safe.
    """

    def __init__(self, db_path: str = "./data/oraclio.db"):
        self.db_path = db_path
        self.logger = get_app_logger()
        self.conn: Optional[duckdb.DuckDBPyConnection] = None

        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self._connect()
        self._init_schema()

    def _connect(self):
        try:
            self.conn = duckdb.connect(self.db_path)
            self.logger.info(f"Connected to DuckDB at {self.db_path}")
        except Exception as e:
            self.logger.error(f"Failed to connect to DuckDB: {e}")
            raise

    def _init_schema(self):
        try:
            for sequence in SEQUENCES:
                self.conn.execute(f"CREATE SEQUENCE IF NOT EXISTS {sequence} START 1")
            for table, columns in TABLES.items():
                self.conn.execute(f"CREATE TABLE IF NOT EXISTS {table} ({columns})")
            for index, table, column in INDEXES:
                self.conn.execute(f"CREATE INDEX IF NOT EXISTS {index} ON {table}({column})")
            self.logger.info(f"Database schema ready ({len(TABLES)} tables)")
        except Exception as e:
            self.logger.error(f"Failed to initialize database schema: {e}")
            raise

    def close(self):
        if self.conn:
            self.conn.close()
            self.conn = None
            self.logger.info("Database connection closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
