from ionikmetrics.sysinfo_provider import GetrusageProvider, SysinfoProvider


def _collect(provider):
    result = {}

    def collect(key, value):
        result[key] = value
        return False

    provider.query(collect)
    return result


def _keys_until_stop(provider):
    keys = []

    def first_only(key, value):
        keys.append(key)
        return True

    provider.query(first_only)
    return keys


def test_sysinfo_reports_all_keys_in_order():
    result = _collect(SysinfoProvider())
    assert list(result) == [
        "uptime",
        "totalram",
        "freeram",
        "sharedram",
        "bufferram",
        "totalswap",
        "freeswap",
        "totalhigh",
        "freehigh",
    ]


def test_sysinfo_values_are_consistent():
    result = _collect(SysinfoProvider())
    assert result["totalram"] > 0
    assert 0 <= result["freeram"] <= result["totalram"]
    assert 0 <= result["freeswap"] <= result["totalswap"]
    assert result["uptime"] >= 0
    assert all(isinstance(v, int) for v in result.values())


def test_sysinfo_stops_when_callback_returns_true():
    keys = _keys_until_stop(SysinfoProvider())
    assert keys == ["uptime"]


def test_getrusage_reports_all_keys():
    result = _collect(GetrusageProvider())
    assert list(result) == ["maxrss", "ixrss", "idrss", "isrss"]
    assert result["maxrss"] > 0


def test_getrusage_stops_when_callback_returns_true():
    keys = _keys_until_stop(GetrusageProvider())
    assert keys == ["maxrss"]