"""
Signal confirmation engine.

Scans the trailing window of a daily price series, records Golden/Death
Crosses as pending conditions and confirms them into entry/exit alerts when
the weighted secondary checks reach the threshold within the window.

Pipeline:
Price Series → Validation → Indicators → Primary Detection → Confirmation → Alerts
"""

import threading
import weakref
from collections.abc import Sequence
from dataclasses import replace
from datetime import date
from typing import Optional

from .config.defaults import AlertConfig, ConfirmationParams, IndicatorParams, get_default_config
from .config.loader import ConfigLoader
from .data.models import PriceBar
from .data.validators import PriceSeriesValidator
from .errors import ConfigurationError, StorageError
from .indicators.calculator import IndicatorCalculator
from .logging.config import (
    get_confirmation_logger,
    get_logger,
    get_state_logger,
    log_confirmation_decision,
    log_state_transition,
)
from .models.indicators import IndicatorSeries, IndicatorSnapshot
from .persistence.condition_store import ConditionStore, create_condition_store
from .signals.models import Alert, ConditionState, ConditionType, PendingCondition, SignalType
from .signals.scoring import SecondaryConditions, evaluate_secondary_conditions
from .utils.time import days_between, format_bar_date, is_within_window, window_cutoff

logger = get_logger(__name__)
confirmation_logger = get_confirmation_logger(__name__)
state_logger = get_state_logger(__name__)


class SignalConfirmationEngine:
    """
    Confirms trend crosses into alerts.

    Analyses of the same symbol are serialized; the store is the only state
    shared between calls.
    """

    def __init__(
        self,
        store: Optional[ConditionStore] = None,
        config: Optional[AlertConfig] = None,
        calculator: Optional[IndicatorCalculator] = None,
        config_loader: Optional[ConfigLoader] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            store: Primary condition store, built from `config.store` if omitted
            config: Engine configuration, defaults if omitted
            calculator: Indicator engine; one per indicator config if omitted
            config_loader: Resolves per-symbol configuration when given
        """
        self.config = config or get_default_config()
        self.store = store or create_condition_store(self.config.store)
        self.calculator = calculator
        self.config_loader = config_loader
        self.validator = PriceSeriesValidator()

        self._calculators: dict[IndicatorParams, IndicatorCalculator] = {}
        # Entries vanish once no running analysis holds the lock
        self._symbol_locks: weakref.WeakValueDictionary[str, threading.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._locks_guard = threading.Lock()

        logger.info(
            "Signal confirmation engine initialized",
            store=type(self.store).__name__,
            time_window_days=self.config.confirmation.time_window_days,
            threshold=self.config.confirmation.threshold
        )

    def analyze(self, price_series: Sequence[PriceBar], symbol: str) -> list[Alert]:
        """
        Analyze a daily price series and emit confirmed alerts.

        Args:
            price_series: Daily bars in chronological order
            symbol: Stock symbol the series belongs to

        Returns:
            Alerts confirmed during the scan, in scan order

        Raises:
            TemporalDataError: Bars out of order or with duplicate dates
            MalformedDataError: Inconsistent bar values
            IndicatorCalculationError: Indicator series could not be computed
            StorageError: Condition store failure; the scan is aborted and
                alerts confirmed before the failure are on `partial_alerts`
        """
        config = self._config_for(symbol)

        with self._symbol_lock(symbol):
            return self._analyze(list(price_series), symbol, config)

    def _analyze(self, bars: list[PriceBar], symbol: str, config: AlertConfig) -> list[Alert]:
        if not bars:
            logger.debug("Empty price series, nothing to analyze", symbol=symbol)
            return []

        self.validator.validate(bars, symbol)
        series = self._calculator_for(config).calculate(bars)

        params = config.confirmation
        last_index = series.last_index
        start_index = max(0, last_index - params.time_window_days)
        alerts: list[Alert] = []

        try:
            for index in range(start_index, last_index + 1):
                self._detect_primary_condition(series, index, symbol)

                snapshot = series.snapshot(index)
                if not snapshot.is_complete():
                    logger.debug(
                        "Indicators not ready, skipping confirmation",
                        symbol=symbol,
                        date=format_bar_date(snapshot.date)
                    )
                    continue

                for condition_type in (ConditionType.GOLDEN_CROSS, ConditionType.DEATH_CROSS):
                    self._confirm_pending(
                        series, index, snapshot, symbol, condition_type, params, alerts
                    )

            if config.store.purge_expired:
                self._purge_expired(symbol, series.dates[last_index], params)
        except StorageError as e:
            # Confirmed conditions are already deleted; hand their alerts back
            e.partial_alerts = list(alerts)
            logger.error(
                "Analysis aborted by storage failure",
                symbol=symbol,
                operation=e.operation,
                confirmed_before_failure=len(alerts),
                error=str(e)
            )
            raise

        logger.info(
            "Analysis complete",
            symbol=symbol,
            bars=len(bars),
            scanned_days=last_index - start_index + 1,
            alerts=len(alerts)
        )

        return alerts

    def _detect_primary_condition(
        self,
        series: IndicatorSeries,
        index: int,
        symbol: str
    ) -> Optional[PendingCondition]:
        """Record a Golden or Death Cross occurring on day `index`."""
        if index < 1:
            return None

        short_ma, long_ma = series.short_ma[index], series.long_ma[index]
        prev_short, prev_long = series.short_ma[index - 1], series.long_ma[index - 1]
        if None in (short_ma, long_ma, prev_short, prev_long):
            return None

        if short_ma > long_ma and prev_short <= prev_long:
            condition_type = ConditionType.GOLDEN_CROSS
        elif short_ma < long_ma and prev_short >= prev_long:
            condition_type = ConditionType.DEATH_CROSS
        else:
            return None

        occurrence = series.dates[index]
        condition = self.store.save(symbol, condition_type, occurrence)

        log_state_transition(
            state_logger,
            symbol=symbol,
            condition_id=condition.id,
            from_state="none",
            to_state=ConditionState.PENDING.value,
            trigger=condition_type.value,
            context={
                "occurrence_date": format_bar_date(occurrence),
                "short_ma": short_ma,
                "long_ma": long_ma,
            }
        )

        return condition

    def _confirm_pending(
        self,
        series: IndicatorSeries,
        index: int,
        snapshot: IndicatorSnapshot,
        symbol: str,
        condition_type: ConditionType,
        params: ConfirmationParams,
        alerts: list[Alert]
    ) -> None:
        """Confirm active conditions of one type against day `index` into `alerts`."""
        cutoff = window_cutoff(snapshot.date, params.time_window_days)
        pending = self.store.find_active(symbol, condition_type, cutoff)
        if not pending:
            return

        secondary = evaluate_secondary_conditions(condition_type, series, index, params)
        score = secondary.score(params)
        confirmed = secondary.is_confirmed(params)

        for condition in pending:
            if not is_within_window(condition.occurrence_date, snapshot.date, params.time_window_days):
                # Dated after the evaluation day
                logger.debug(
                    "Condition outside confirmation window",
                    symbol=symbol,
                    condition_id=condition.id,
                    occurrence_date=format_bar_date(condition.occurrence_date),
                    date=format_bar_date(snapshot.date)
                )
                continue

            log_confirmation_decision(
                confirmation_logger,
                symbol=symbol,
                condition_type=condition_type.value,
                confirmed=confirmed,
                score=score,
                threshold=params.threshold,
                context={
                    "condition_id": condition.id,
                    "date": format_bar_date(snapshot.date),
                    "checks": secondary.as_context(),
                }
            )

            if not confirmed:
                continue

            alert = self._build_alert(snapshot, symbol, secondary, score)
            self.store.delete(condition)

            log_state_transition(
                state_logger,
                symbol=symbol,
                condition_id=condition.id,
                from_state=ConditionState.PENDING.value,
                to_state=ConditionState.CONFIRMED.value,
                trigger=alert.signal_type.value,
                context={
                    "occurrence_date": format_bar_date(condition.occurrence_date),
                    "days_to_confirm": days_between(condition.occurrence_date, snapshot.date),
                    "reasoning": alert.reasoning,
                }
            )

            alerts.append(alert)

    def _build_alert(
        self,
        snapshot: IndicatorSnapshot,
        symbol: str,
        secondary: SecondaryConditions,
        score: float
    ) -> Alert:
        signal_type = secondary.condition_type.signal_type
        band = snapshot.bollinger_upper if signal_type is SignalType.ENTRY else snapshot.bollinger_lower

        return Alert(
            signal_type=signal_type,
            stock_symbol=symbol,
            date=snapshot.date,
            short_ma_value=snapshot.short_ma,
            long_ma_value=snapshot.long_ma,
            rsi_value=snapshot.rsi,
            macd_value=snapshot.macd,
            macd_signal_value=snapshot.macd_signal,
            band_value=band,
            reasoning=secondary.reasoning(),
            score=score,
        )

    def _purge_expired(self, symbol: str, last_date: date, params: ConfirmationParams) -> None:
        """Drop conditions no later scan day can reach."""
        cutoff = window_cutoff(last_date, params.time_window_days)
        purged = self.store.purge_expired(symbol, cutoff)

        if purged:
            log_state_transition(
                state_logger,
                symbol=symbol,
                condition_id=None,
                from_state=ConditionState.PENDING.value,
                to_state=ConditionState.EXPIRED.value,
                trigger="time_window",
                context={
                    "purged": purged,
                    "on_or_before": format_bar_date(cutoff),
                }
            )

    def _config_for(self, symbol: str) -> AlertConfig:
        if self.config_loader is None:
            return self.config

        config = self.config_loader.load_config(symbol)
        # One store serves every symbol; only purge_expired may vary
        if replace(config.store, purge_expired=self.config.store.purge_expired) != self.config.store:
            raise ConfigurationError(
                f"Invalid configuration for {symbol}: store backend, db_path and "
                "deduplicate cannot be overridden per symbol",
                context={"symbol": symbol}
            )
        return config

    def _calculator_for(self, config: AlertConfig) -> IndicatorCalculator:
        if self.calculator is not None:
            return self.calculator

        calculator = self._calculators.get(config.indicators)
        if calculator is None:
            calculator = IndicatorCalculator(config.indicators)
            self._calculators[config.indicators] = calculator
        return calculator

    def _symbol_lock(self, symbol: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._symbol_locks.get(symbol)
            if lock is None:
                lock = threading.Lock()
                self._symbol_locks[symbol] = lock
            return lock
