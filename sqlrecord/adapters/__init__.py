"""Adapters turning driver connections into the querier's connection primitive."""

from sqlrecord.adapters.dbapi import DBAPIConnection, DBAPICursor, DBAPIResult, DBAPIRows

__all__ = ("DBAPIConnection", "DBAPICursor", "DBAPIResult", "DBAPIRows")
