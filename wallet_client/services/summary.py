import logging
from datetime import datetime
from typing import Callable, List, Optional

from pydantic import BaseModel

from wallet_client.core.exceptions import WalletNotLoadedException
from wallet_client.external.wallet_api import WalletApiService
from wallet_client.schemas.transaction import (
    BalanceGraphPoint,
    BalanceGraphRequest,
    GraphView,
    WalletSummary,
)
from wallet_client.services.session import SessionStore
from wallet_client.utils.money import Money

logger = logging.getLogger(__name__)

QUARTER_LABELS = {
    "Q1": "Jan - Mar",
    "Q2": "Apr - Jun",
    "Q3": "Jul - Sep",
    "Q4": "Oct - Dec",
}
EMPTY_CHART_CEILING = 1_000_000


def graph_label(view: GraphView, label: str) -> str:
    if view == GraphView.quartal:
        return QUARTER_LABELS.get(label, label)
    if view == GraphView.monthly:
        return label[:3]
    return label


class SummaryView(BaseModel):
    summary: WalletSummary
    balance_display: str
    income_display: str
    outcome_display: str
    view: GraphView
    year: int
    graph: List[BalanceGraphPoint]
    available_years: List[int]
    chart_ceiling: int


class SummaryService:
    def __init__(
        self,
        api: WalletApiService,
        session: SessionStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.api = api
        self.session = session
        self.clock = clock

    async def load(self, view: GraphView = GraphView.quartal, year: Optional[int] = None) -> SummaryView:
        wallet = self.session.get_wallet()
        if wallet is None:
            raise WalletNotLoadedException()

        now = self.clock()
        year = year or now.year
        view = GraphView(view)

        summary = await self.api.get_summary(wallet.id)

        month = f"{now.month:02d}" if view == GraphView.weekly else None
        graph = await self.api.get_balance_graph(
            BalanceGraphRequest(wallet_id=wallet.id, view=view, year=year, month=month)
        )

        points = [
            point.model_copy(update={"label": graph_label(view, point.label)})
            for point in graph.data
        ]
        years = {year}
        if graph.year:
            years.add(graph.year)

        peak = max(summary.total_income, summary.total_outcome)
        return SummaryView(
            summary=summary,
            balance_display=str(Money(summary.balance)),
            income_display=str(Money(summary.total_income)),
            outcome_display=str(Money(summary.total_outcome)),
            view=view,
            year=year,
            graph=points,
            available_years=sorted(years, reverse=True),
            chart_ceiling=int(peak * 1.2) or EMPTY_CHART_CEILING,
        )
