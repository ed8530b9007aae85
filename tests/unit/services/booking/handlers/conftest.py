import pytest


@pytest.fixture
def use_service(monkeypatch, service, user_repository):
    """ハンドラモジュールの service・user_repository をインメモリ構成に差し替える"""

    def _apply(module):
        monkeypatch.setattr(module, "service", service)
        if hasattr(module, "user_repository"):
            monkeypatch.setattr(module, "user_repository", user_repository)
        return module

    return _apply
