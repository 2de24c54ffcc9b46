"""
Table definitions
"""

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table

metadata = MetaData()

employees = Table(
    "employees",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("created_at", DateTime, nullable=False),
)
