from unittest.mock import patch, ANY
from monitoring.pushgateway import metric_name, push_max_epoch, push_max_epochs

GATEWAY = "http://pushgateway:9091"


def test_metric_name():
    assert metric_name("btc") == "btc_max_epoch_nonzero"


@patch('monitoring.pushgateway.push_to_gateway')
def test_push_max_epoch_groups_by_chain(mock_push):
    """Une jauge par chaîne, poussée avec job=<chain>."""
    push_max_epoch(GATEWAY, "btc", 5)

    mock_push.assert_called_once_with(GATEWAY, job="btc", registry=ANY)
    registry = mock_push.call_args[1]["registry"]
    assert registry.get_sample_value("btc_max_epoch_nonzero") == 5.0
    # rien d'autre que la jauge de la chaîne dans le registre poussé
    assert [m.name for m in registry.collect()] == ["btc_max_epoch_nonzero"]


@patch('monitoring.pushgateway.push_to_gateway')
def test_push_max_epochs_pushes_every_chain(mock_push):
    results = push_max_epochs({"eth": 40, "btc": 5}, GATEWAY)

    assert results == {"btc": True, "eth": True}
    assert [c[1]["job"] for c in mock_push.call_args_list] == ["btc", "eth"]


@patch('monitoring.pushgateway.push_to_gateway')
def test_push_max_epochs_continues_after_error(mock_push, caplog):
    mock_push.side_effect = [OSError("Connection refused"), None]

    results = push_max_epochs({"btc": 5, "eth": 40}, GATEWAY)

    assert results == {"btc": False, "eth": True}
    assert mock_push.call_count == 2
    assert "Connection refused" in caplog.text


@patch('monitoring.pushgateway.push_to_gateway')
def test_push_max_epochs_no_rows(mock_push):
    assert push_max_epochs({}, GATEWAY) == {}
    mock_push.assert_not_called()
