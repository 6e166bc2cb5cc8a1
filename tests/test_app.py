"""Tests for the application factory."""

import importlib
from dataclasses import replace

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from outsider_gallery.api.app import create_app
from outsider_gallery.containers import AppContainer


def test_health_endpoint(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_shutdown_closes_resources(container: AppContainer) -> None:
    closed: list[bool] = []

    async def close_resources() -> None:
        closed.append(True)

    app = create_app(replace(container, close_resources=close_resources))

    with TestClient(app) as client:
        client.get("/health")
        assert closed == []

    assert closed == [True]


def test_serverless_entrypoint_exposes_app(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHOPIFY_STORE_DOMAIN", "outsider-gallery.myshopify.com")
    monkeypatch.setenv("SHOPIFY_STOREFRONT_TOKEN", "storefront-token")

    entrypoint = importlib.import_module("api.index")

    assert isinstance(entrypoint.app, FastAPI)
    assert TestClient(entrypoint.app).get("/health").json() == {"status": "ok"}
