"""
Testes para setup_logging() e as fábricas de loggers por camada.

Os logs do núcleo de histórico de preços precisam sair em JSON com o
contexto da aplicação e da camada, senão um gráfico degradado não pode
ser rastreado até a condição upstream que o causou.
"""

import json
import logging
from io import StringIO

import pytest
import structlog

from cryptomap.infrastructure.observability import (
    get_cache_logger,
    get_ingestion_logger,
    get_logger,
    get_orchestration_logger,
    setup_logging,
)


@pytest.fixture
def clean_logging():
    """
    Limpa a configuração de logging entre testes.

    structlog e logging mantêm estado global.
    """
    original_handlers = logging.root.handlers[:]
    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
    structlog.reset_defaults()

    yield

    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
    structlog.reset_defaults()
    logging.root.handlers = original_handlers


@pytest.fixture
def captured(clean_logging):
    """Configura JSON em INFO e devolve o buffer com a saída do root logger."""
    setup_logging(level="INFO", json_logs=True, include_timestamp=False)
    logging.root.setLevel(logging.INFO)

    output = StringIO()
    handler = logging.StreamHandler(output)
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.root.addHandler(handler)

    yield output

    logging.root.removeHandler(handler)


def json_lines(output: StringIO) -> list[dict]:
    parsed = []
    for line in output.getvalue().splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            parsed.append(json.loads(line))
        except json.JSONDecodeError:
            continue
    return parsed


class TestSetupLogging:
    def test_setup_json_mode_adds_app_and_severity(self, captured):
        """Test 1/5: Modo JSON com contexto da aplicação."""
        structlog.get_logger("test_json").warning("json_test_event", value=123)

        records = json_lines(captured)
        assert records, "No valid JSON found"
        record = records[-1]
        assert record["event"] == "json_test_event"
        assert record["value"] == 123
        assert record["app"] == "cryptomap"
        assert record["severity"] == "WARNING"
        assert "timestamp" not in record

    def test_setup_text_mode(self, clean_logging):
        """Test 2/5: Modo texto (não-JSON) produz saída legível."""
        setup_logging(level="INFO", json_logs=False)
        assert structlog.is_configured()
        logging.root.setLevel(logging.INFO)

        output = StringIO()
        handler = logging.StreamHandler(output)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logging.root.addHandler(handler)
        try:
            structlog.get_logger("test_text").info("text_test_event", value=456)
            text = output.getvalue()
            assert "text_test_event" in text
            with pytest.raises(json.JSONDecodeError):
                json.loads(text.strip().splitlines()[-1])
        finally:
            logging.root.removeHandler(handler)

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR"])
    def test_setup_sets_root_level(self, clean_logging, level):
        """Test 3/5: O nível do root segue o parâmetro."""
        setup_logging(level=level, json_logs=True)
        assert logging.root.level == getattr(logging, level)

    def test_setup_invalid_level_falls_back_to_info(self, clean_logging):
        """Test 4/5: Nível inválido cai para INFO."""
        setup_logging(level="INVALID_LEVEL", json_logs=True)
        assert structlog.is_configured()
        assert logging.root.level == logging.INFO

    def test_setup_level_applies_when_root_already_has_handlers(self, clean_logging):
        """O nível é aplicado mesmo com um handler já instalado no root."""
        handler = logging.StreamHandler(StringIO())
        logging.root.addHandler(handler)
        try:
            setup_logging(level="DEBUG", json_logs=True)
            assert logging.root.level == logging.DEBUG
        finally:
            logging.root.removeHandler(handler)

    def test_timestamp_is_iso(self, clean_logging):
        """Test 5/5: Timestamp ISO quando habilitado."""
        setup_logging(level="INFO", json_logs=True, include_timestamp=True)
        logging.root.setLevel(logging.INFO)
        output = StringIO()
        handler = logging.StreamHandler(output)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logging.root.addHandler(handler)
        try:
            structlog.get_logger("test_ts").info("with_timestamp")
            record = json_lines(output)[-1]
            assert "T" in record["timestamp"]
        finally:
            logging.root.removeHandler(handler)


class TestLayerLoggers:
    """As fábricas por camada vinculam layer, component e contexto extra."""

    def test_get_logger_binds_context(self, captured):
        log = get_logger("custom", layer="cache", component="lru", coin_id="bitcoin")
        log.info("with_context")

        record = json_lines(captured)[-1]
        assert record["layer"] == "cache"
        assert record["component"] == "lru"
        assert record["module"] == "custom"
        assert record["coin_id"] == "bitcoin"

    def test_ingestion_logger_carries_provider(self, captured):
        get_ingestion_logger("coingecko-client", provider="coingecko").info("fetched")

        record = json_lines(captured)[-1]
        assert record["layer"] == "ingestion"
        assert record["component"] == "coingecko-client"
        assert record["provider"] == "coingecko"

    def test_cache_and_orchestration_defaults(self, captured):
        get_cache_logger().info("entry_stored")
        get_orchestration_logger().warning("rate_limited_retrying", retry=1)

        cache_record, orch_record = json_lines(captured)[-2:]
        assert (cache_record["layer"], cache_record["component"]) == (
            "cache",
            "price-cache",
        )
        assert (orch_record["layer"], orch_record["component"]) == (
            "orchestration",
            "price-history",
        )
        assert orch_record["retry"] == 1

    def test_bound_context_is_isolated(self, captured):
        base = get_orchestration_logger()
        base.bind(coin_id="bitcoin").info("first")
        base.info("second")

        first, second = json_lines(captured)[-2:]
        assert first["coin_id"] == "bitcoin"
        assert "coin_id" not in second

    def test_special_characters_do_not_break_rendering(self, captured):
        log = get_logger("special_chars")
        for key, value in [
            ("unicode", "café ☕ español ñ"),
            ("emoji", "🚀 rocket 🎯 target"),
            ("special", "line\nbreak\ttab\\backslash"),
        ]:
            log.info("special_char_test", **{key: value})

        assert len(json_lines(captured)) == 3
