from unittest import mock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from sedekahje.db import connect_db, disconnect_db


@mock.patch("sedekahje.db.MongoClient")
def test_connect_pings_and_returns_client(client_cls, capsys):
    client = connect_db("mongodb://localhost:27017")
    client_cls.assert_called_once_with("mongodb://localhost:27017")
    assert client is client_cls.return_value
    client.admin.command.assert_called_once_with("ping")
    assert "successfully connected" in capsys.readouterr().out


@mock.patch("sedekahje.db.MongoClient")
def test_failed_ping_raises_and_closes(client_cls):
    client_cls.return_value.admin.command.side_effect = ServerSelectionTimeoutError("down")
    with pytest.raises(ServerSelectionTimeoutError):
        connect_db("mongodb://localhost:27017")
    client_cls.return_value.close.assert_called_once_with()


def test_empty_uri_rejected():
    with pytest.raises(ValueError):
        connect_db("")


def test_disconnect_closes_client():
    client = mock.Mock()
    disconnect_db(client)
    client.close.assert_called_once_with()
    assert client.close.call_count == 1