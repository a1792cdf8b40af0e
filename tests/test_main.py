"""Tests for main module."""

from studio_api import main as main_module


def test_main_serves_asgi_app(monkeypatch) -> None:
    calls = []
    monkeypatch.setenv("PORT", "8123")
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.setattr(
        main_module.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs))
    )

    main_module.main()

    assert calls == [
        (
            "studio_api.api.asgi:app",
            {"host": "0.0.0.0", "port": 8123, "log_level": "info"},
        )
    ]
