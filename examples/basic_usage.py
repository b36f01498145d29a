#!/usr/bin/env python3
"""
Basic Usage Example - crossalert Signal Confirmation Engine

This script demonstrates the basic usage of the signal confirmation engine
with a synthetic daily price series. It shows how to:
- Configure the engine with shorter indicator periods
- Feed a growing price series day by day
- Inspect pending conditions and confirmed alerts

Run: python examples/basic_usage.py
"""

import math
from datetime import date, timedelta
from typing import List

from crossalert.config.defaults import (
    AlertConfig,
    ConfirmationParams,
    IndicatorParams,
    StoreParams,
)
from crossalert.data.models import PriceBar
from crossalert.engine import SignalConfirmationEngine
from crossalert.logging import configure_logging
from crossalert.persistence.condition_store import InMemoryConditionStore


def create_price_series(start: date, days: int) -> List[PriceBar]:
    """Create a slow decline followed by a recovery with a sine wobble."""
    bars = []
    price = 100.0
    for i in range(days):
        drift = -0.6 if i < days // 2 else 0.9
        price = max(price + drift + 1.5 * math.sin(i / 2.0), 5.0)
        open_price = price - 0.4
        bars.append(PriceBar.create(
            end_date=start + timedelta(days=i),
            open=open_price,
            high=max(open_price, price) + 0.8,
            low=min(open_price, price) - 0.8,
            close=price,
            volume=1_000_000 + 5_000 * i,
        ))
    return bars


def print_alert_details(alert) -> None:
    """Print detailed alert information."""
    print("🚨 ALERT GENERATED 🚨")
    print(f"  {alert}")
    print(f"  Score: {alert.score:.2f}")
    print("-" * 50)


def main():
    """Main demonstration function."""
    print("🚀 crossalert Signal Confirmation Engine - Basic Usage Demo")
    print("=" * 60)

    configure_logging(level="WARNING")

    config = AlertConfig(
        indicators=IndicatorParams(
            short_ma_period=5,
            long_ma_period=15,
            rsi_period=7,
            macd_short_period=4,
            macd_long_period=9,
            macd_signal_period=3,
            bollinger_period=10,
        ),
        confirmation=ConfirmationParams(),
        store=StoreParams(),
    )
    store = InMemoryConditionStore()
    engine = SignalConfirmationEngine(store=store, config=config)
    print("1. Engine initialized with short indicator periods")
    print()

    series = create_price_series(date(2024, 1, 1), 80)
    print(f"2. Replaying {len(series)} daily bars one day at a time...")
    print()

    total_alerts = 0
    for day in range(20, len(series) + 1):
        alerts = engine.analyze(series[:day], "DEMO")
        for alert in alerts:
            print_alert_details(alert)
        total_alerts += len(alerts)

    print("3. Final state:")
    print(f"   Alerts emitted: {total_alerts}")
    print(f"   Pending conditions: {store.count('DEMO')}")
    print()
    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
