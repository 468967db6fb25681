"""
Salesforce storage adapter.
"""

from .auth import (
    OAuthPasswordTokenProvider,
    StaticTokenProvider,
    TokenProvider,
    build_token_provider,
)
from .client import SalesforceClient, parse_api_error
from .models import SalesforceReportRecord
from .repository import SalesforceReportRepository
from .soql import ReportQueryBuilder, escape_soql, escape_soql_like, format_soql_date


def create_salesforce_repository(config, clock=None) -> SalesforceReportRepository:
    """Build the repository, client and token provider from a SalesforceConfig."""
    client = SalesforceClient.from_config(config, build_token_provider(config))
    return SalesforceReportRepository(
        client,
        object_name=config.object_name,
        external_id_field=config.external_id_field,
        clock=clock,
    )


__all__ = [
    "TokenProvider",
    "StaticTokenProvider",
    "OAuthPasswordTokenProvider",
    "build_token_provider",
    "SalesforceClient",
    "parse_api_error",
    "SalesforceReportRecord",
    "SalesforceReportRepository",
    "ReportQueryBuilder",
    "escape_soql",
    "escape_soql_like",
    "format_soql_date",
    "create_salesforce_repository",
]
