"""Business context assembly from stores and the CRM."""

import math
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from ..connectors.bitrix import BitrixClient
from ..db.database_models.integration import IntegrationDO
from ..db.database_models.user import UserDO
from ..db.repositories.integration import IntegrationRepository
from ..db.repositories.metric import MetricRepository
from ..db.repositories.user import UserRepository
from ..models.context import BusinessContext, HistoryTurn
from ..utils.logger import get_app_logger
from .conversation_store import ConversationStore


CRM_SERVICE = "bitrix24"
DEFAULT_CURRENCY = "RUB"

SALES_PLACEHOLDER = {"month": "Current", "revenue": 0, "customers": 0, "deals": 0}
CUSTOMERS_PLACEHOLDER = {
    "name": "No CRM source connected",
    "revenue": "0",
    "growth": "0%",
    "plan": "No data",
    "users": 0,
}
ACTIVITIES_PLACEHOLDER = {
    "type": "alert",
    "message": "Connect Bitrix24 for real-time data",
    "time": "Now",
    "value": "Setup",
}


def deal_amount(deal: Dict[str, Any]) -> float:
    """Deal value as a finite float; unparseable, NaN or infinite amounts count as 0."""
    try:
        amount = float(deal.get("OPPORTUNITY") or 0)
    except (TypeError, ValueError):
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def format_amount(value: float, currency: str) -> str:
    if float(value).is_integer():
        return f"{int(value):,} {currency}"
    return f"{value:,.2f} {currency}"


def deals_currency(deals: List[Dict[str, Any]]) -> str:
    for deal in deals:
        if deal.get("CURRENCY_ID"):
            return deal["CURRENCY_ID"]
    return DEFAULT_CURRENCY


def summarize_sales(deals: List[Dict[str, Any]], currency: str) -> List[Dict[str, Any]]:
    total = sum(deal_amount(deal) for deal in deals)
    return [{
        "month": "Current",
        "revenue": round(total),
        "customers": len(deals),
        "deals": len(deals),
        "currency": currency,
    }]


def top_customers(deals: List[Dict[str, Any]], limit: int, currency: str) -> List[Dict[str, Any]]:
    # sorted() is stable, so equal amounts keep CRM order
    ranked = sorted(deals, key=deal_amount, reverse=True)[:limit]
    return [
        {
            "name": deal.get("TITLE") or f"Deal #{deal.get('ID')}",
            "revenue": format_amount(deal_amount(deal), currency),
            "growth": "+0%",
            "plan": deal.get("STAGE_ID") or "Unknown",
            "users": 1,
        }
        for deal in ranked
    ]


def recent_activities(
    deals: List[Dict[str, Any]],
    contacts: List[Dict[str, Any]],
    limit: int,
    currency: str
) -> List[Dict[str, Any]]:
    activities = []
    for deal in deals[:limit]:
        amount = format_amount(deal_amount(deal), currency)
        activities.append({
            "type": "sale",
            "message": f"Deal \"{deal.get('TITLE') or deal.get('ID')}\" - {amount}",
            "time": "Recent",
            "value": amount,
        })
    if contacts:
        activities.append({
            "type": "user",
            "message": f"{len(contacts)} contacts in CRM",
            "time": "Current",
            "value": str(len(contacts)),
        })
    return activities


def team_performance(deals: List[Dict[str, Any]], currency: str) -> List[Dict[str, Any]]:
    teams: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
    for deal in deals:
        assignee = str(deal.get("ASSIGNED_BY_ID") or "unassigned")
        entry = teams.setdefault(assignee, {"assignee_id": assignee, "deals": 0, "revenue": 0.0})
        entry["deals"] += 1
        entry["revenue"] += deal_amount(deal)

    rows = sorted(teams.values(), key=lambda row: row["revenue"], reverse=True)
    for row in rows:
        row["revenue"] = round(row["revenue"])
        row["currency"] = currency
    return rows


def find_crm_integration(integrations: List[IntegrationDO]) -> Optional[IntegrationDO]:
    for integration in integrations:
        if integration.service == CRM_SERVICE and integration.is_active and (integration.api_key or "").strip():
            return integration
    return None


class ContextAssembler:
    """
    Builds a BusinessContext for one user.

    ``assemble`` never raises. Each upstream read is isolated; a failure is
    logged and replaced by an empty value, and empty CRM-derived lists get
    labelled placeholder entries.
    """

    def __init__(
        self,
        users: UserRepository,
        integrations: IntegrationRepository,
        metrics: MetricRepository,
        store: ConversationStore,
        crm: BitrixClient,
        crm_fetch_limit: int = 50,
        top_customers_limit: int = 3,
        recent_activities_limit: int = 3,
        history_limit: int = 20
    ):
        self.users = users
        self.integrations = integrations
        self.metrics = metrics
        self.store = store
        self.crm = crm
        self.crm_fetch_limit = crm_fetch_limit
        self.top_customers_limit = top_customers_limit
        self.recent_activities_limit = recent_activities_limit
        self.history_limit = history_limit
        self.logger = get_app_logger()

    async def assemble(self, user_id: int) -> BusinessContext:
        context = BusinessContext(
            metrics=self._read_metrics(user_id),
            conversation_history=await self._read_history(user_id),
        )

        user = self._read_user(user_id)
        if user is not None:
            context.user_name = user.full_name
            context.company_name = user.company or user.company_name
            context.user_role = user.role

        integration = self._read_crm_integration(user_id)
        if integration is not None:
            await self._load_crm(context, integration)

        self._fill_placeholders(context)
        return context

    def _read_metrics(self, user_id: int) -> List[Dict[str, Any]]:
        try:
            return [metric.to_context() for metric in self.metrics.list_by_user(user_id)]
        except Exception as e:
            self.logger.warning(f"Metrics unavailable for user {user_id}: {e}")
            return []

    def _read_user(self, user_id: int) -> Optional[UserDO]:
        try:
            return self.users.get(user_id)
        except Exception as e:
            self.logger.warning(f"User profile unavailable for user {user_id}: {e}")
            return None

    async def _read_history(self, user_id: int) -> List[HistoryTurn]:
        try:
            return await self.store.get_history(user_id, limit=self.history_limit)
        except Exception as e:
            self.logger.warning(f"Conversation history unavailable for user {user_id}: {e}")
            return []

    def _read_crm_integration(self, user_id: int) -> Optional[IntegrationDO]:
        try:
            return find_crm_integration(self.integrations.list_active(user_id))
        except Exception as e:
            self.logger.warning(f"Integrations unavailable for user {user_id}: {e}")
            return None

    async def _load_crm(self, context: BusinessContext, integration: IntegrationDO):
        webhook_url = integration.api_key.strip()
        try:
            deals = await self.crm.list_deals(webhook_url, limit=self.crm_fetch_limit)
            contacts = await self.crm.list_contacts(webhook_url, limit=self.crm_fetch_limit)
        except Exception as e:
            self.logger.error(f"CRM fetch failed for user {integration.user_id}: {e}")
            return

        self.logger.info(f"Loaded {len(deals)} deals and {len(contacts)} contacts for user {integration.user_id}")
        currency = deals_currency(deals)
        if deals:
            context.sales_data = summarize_sales(deals, currency)
            context.top_customers = top_customers(deals, self.top_customers_limit, currency)
            context.team_performance = team_performance(deals, currency)
        context.recent_activities = recent_activities(deals, contacts, self.recent_activities_limit, currency)

    @staticmethod
    def _fill_placeholders(context: BusinessContext):
        if not context.sales_data:
            context.sales_data = [dict(SALES_PLACEHOLDER)]
        if not context.top_customers:
            context.top_customers = [dict(CUSTOMERS_PLACEHOLDER)]
        if not context.recent_activities:
            context.recent_activities = [dict(ACTIVITIES_PLACEHOLDER)]
