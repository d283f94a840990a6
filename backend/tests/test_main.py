"""
User API — Application Lifecycle Tests
=======================================

What:  Tests for the lifespan handler and app wiring.
How:   open_user_store is patched to hand back the in-memory store, so no
       MongoDB client is created.
"""

import logging
from unittest.mock import patch

import pytest
from fastapi import FastAPI

from userapi.main import create_app, lifespan
from userapi.middleware.logging import level_for_status


class TestLifespan:

    @pytest.mark.asyncio
    async def test_store_opened_and_closed(self, fake_store):
        app = FastAPI()
        with patch("userapi.main.open_user_store", return_value=fake_store):
            async with lifespan(app):
                assert app.state.user_store is fake_store
                assert fake_store.closed is False
        assert fake_store.closed is True

    @pytest.mark.asyncio
    async def test_unreachable_store_does_not_block_startup(self, fake_store):
        fake_store.unavailable = True
        app = FastAPI()
        with patch("userapi.main.open_user_store", return_value=fake_store):
            async with lifespan(app):
                assert app.state.user_store is fake_store
        assert fake_store.closed is True


class TestAppWiring:

    def test_only_user_routes_registered(self):
        paths = create_app().openapi()["paths"]
        routes = {
            (method.upper(), path)
            for path, operations in paths.items()
            for method in operations
        }
        assert routes == {
            ("GET", "/user/{user_id}"),
            ("POST", "/user"),
            ("DELETE", "/user/{user_id}"),
        }

    @pytest.mark.parametrize(
        "status,level",
        [(200, logging.INFO), (201, logging.INFO), (404, logging.WARNING), (503, logging.ERROR)],
    )
    def test_access_log_level_by_status(self, status, level):
        assert level_for_status(status) == level
