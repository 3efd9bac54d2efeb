"""Seed a demo portfolio for trying the dashboard without entering assets."""

import logging
import random
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session as DBSession

from wealthvue.constants import AssetType, InputMethod, ValueSource
from wealthvue.models import Asset, NAVHistoryEntry
from wealthvue.services.repositories.asset_repository import AssetRepository
from wealthvue.services.repositories.goal_repository import GoalRepository
from wealthvue.services.repositories.nav_history_repository import NavHistoryRepository

logger = logging.getLogger(__name__)

# Fixed ZAR to USD rate so the seeded history does not need a live FX fetch
ZAR_TO_USD = Decimal("0.053")

DEMO_GOAL_AMOUNT = Decimal("250000")
DEMO_GOAL_CURRENCY = "USD"

DEMO_ASSETS = [
    # name, description, type, ticker, quantity, unit_price, currency, value_source, source
    ("Apple Inc", "Technology giant", AssetType.STOCK, "AAPL",
     Decimal("24"), Decimal("189.50"), "USD", ValueSource.LIVE_PRICE, "Robinhood"),
    ("Bitcoin", "Digital gold", AssetType.CRYPTO, "BTC",
     Decimal("0.45"), Decimal("62400"), "USD", ValueSource.LIVE_PRICE, "Binance"),
    ("Ethereum", "Smart contract platform", AssetType.CRYPTO, "ETH",
     Decimal("3.2"), Decimal("3180"), "USD", ValueSource.LIVE_PRICE, "Coinbase"),
    ("Vanguard S&P 500 ETF", "Broad market index fund", AssetType.ETF, "VOO",
     Decimal("10"), Decimal("487.00"), "USD", ValueSource.LIVE_PRICE, "Vanguard"),
    ("2021 Tesla Model 3 Long Range", "Electric vehicle", AssetType.VEHICLE, None,
     Decimal("1"), Decimal("28500"), "USD", ValueSource.AI_ESTIMATE, "Physical"),
    ("FNB Savings Account", "Emergency fund", AssetType.CASH, None,
     Decimal("1"), Decimal("142000"), "ZAR", ValueSource.MANUAL, "FNB"),
    ("Nvidia", "AI chip leader", AssetType.STOCK, "NVDA",
     Decimal("8"), Decimal("875.00"), "USD", ValueSource.LIVE_PRICE, "Charles Schwab"),
    ("Solana", "High-performance blockchain", AssetType.CRYPTO, "SOL",
     Decimal("45"), Decimal("148.00"), "USD", ValueSource.LIVE_PRICE, "Phantom Wallet"),
    ("Car Loan", "Outstanding vehicle finance", AssetType.OTHER, None,
     Decimal("1"), Decimal("-9500"), "USD", ValueSource.MANUAL, "Physical"),
]


def seed_demo_assets(db: DBSession) -> list[Asset]:
    """
    Create the demo assets.

    Skips seeding when any asset already exists, so re-running the script
    never duplicates holdings.

    Returns:
        The created assets (empty if the portfolio was not empty)
    """
    repo = AssetRepository(db)
    if repo.find_all():
        logger.info("Assets already present, skipping demo asset seed")
        return []

    now = datetime.now(UTC)
    assets = [
        Asset(
            name=name,
            description=description,
            asset_type=asset_type,
            ticker=ticker,
            quantity=quantity,
            unit_price=unit_price,
            unit_price_currency=currency,
            total_value=quantity * unit_price,
            total_value_currency=currency,
            value_source=value_source,
            source=source,
            input_method=InputMethod.MANUAL,
            last_refreshed=now,
        )
        for name, description, asset_type, ticker, quantity, unit_price, currency, value_source, source in DEMO_ASSETS
    ]
    repo.save_all(assets)
    logger.info(f"Created {len(assets)} demo assets")
    return assets


def demo_total_usd() -> Decimal:
    """Current demo NAV in USD at the fixed demo ZAR rate."""
    total = Decimal("0")
    for *_, quantity, unit_price, currency, _value_source, _source in DEMO_ASSETS:
        value = quantity * unit_price
        total += value * ZAR_TO_USD if currency == "ZAR" else value
    return total


def seed_nav_history(db: DBSession, days_back: int = 60, today: date | None = None) -> int:
    """
    Generate daily NAV snapshots ending today.

    Starts about 10% below the current demo NAV and drifts upward with small
    daily moves (-0.4% to +0.6%). Days that already have a snapshot are left
    alone.

    Returns:
        Number of snapshots created
    """
    repo = NavHistoryRepository(db)
    today = today or date.today()
    random.seed(42)  # Deterministic demo curve

    value = demo_total_usd() * Decimal("0.9")
    created = 0
    for days_ago in range(days_back, -1, -1):
        day = (today - timedelta(days=days_ago)).isoformat()
        value = value * Decimal(str(1 + (random.random() - 0.4) * 0.01))
        if repo.find_by_date(day) is not None:
            continue
        repo.append(
            NAVHistoryEntry(
                date=day,
                total_nav=value.quantize(Decimal("1")),
                display_currency="USD",
            )
        )
        created += 1

    logger.info(f"Created {created} NAV history snapshots")
    return created


def seed_demo_goal(db: DBSession) -> bool:
    """Set the demo goal unless a goal is already configured."""
    repo = GoalRepository(db)
    if repo.find() is not None:
        return False
    repo.save(DEMO_GOAL_AMOUNT, DEMO_GOAL_CURRENCY)
    logger.info(f"Set demo goal {DEMO_GOAL_AMOUNT} {DEMO_GOAL_CURRENCY}")
    return True


def seed_demo_portfolio(db: DBSession) -> dict:
    """Seed assets, history and goal. Safe to run repeatedly."""
    assets = seed_demo_assets(db)
    snapshots = seed_nav_history(db)
    goal_created = seed_demo_goal(db)
    return {"assets": len(assets), "snapshots": snapshots, "goal_created": goal_created}


if __name__ == "__main__":
    """Run as standalone script."""
    logging.basicConfig(level=logging.INFO)

    from wealthvue.database import SessionLocal
    from wealthvue.init_db import create_tables

    create_tables()
    db = SessionLocal()
    try:
        result = seed_demo_portfolio(db)
        print("\nDemo portfolio seeding complete:")
        print(f"  Assets: {result['assets']}")
        print(f"  NAV snapshots: {result['snapshots']}")
        print(f"  Goal created: {result['goal_created']}")
    finally:
        db.close()
