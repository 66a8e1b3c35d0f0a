import netifaces
import pytest

from total import localip
from total.localip import LOOPBACK_IP, discover_local_ipv4


def fake_interfaces(monkeypatch, table):
    monkeypatch.setattr(localip.netifaces, "interfaces", lambda: list(table))
    monkeypatch.setattr(localip.netifaces, "ifaddresses", lambda iface: table[iface])


class TestDiscoverLocalIPv4:
    def test_first_non_loopback_wins(self, monkeypatch):
        fake_interfaces(monkeypatch, {
            "lo": {netifaces.AF_INET: [{"addr": "127.0.0.1"}]},
            "eth0": {netifaces.AF_INET: [{"addr": "192.168.1.20"}]},
            "wlan0": {netifaces.AF_INET: [{"addr": "10.0.0.7"}]},
        })
        assert discover_local_ipv4() == "192.168.1.20"

    def test_skips_interfaces_without_ipv4(self, monkeypatch):
        fake_interfaces(monkeypatch, {
            "eth0": {netifaces.AF_INET6: [{"addr": "fe80::1"}]},
            "eth1": {netifaces.AF_INET: [{"addr": ""}, {"addr": "172.16.0.3"}]},
        })
        assert discover_local_ipv4() == "172.16.0.3"

    def test_any_loopback_address_is_skipped(self, monkeypatch):
        fake_interfaces(monkeypatch, {"lo": {netifaces.AF_INET: [{"addr": "127.0.1.1"}]}})
        assert discover_local_ipv4() == LOOPBACK_IP

    def test_no_interfaces_falls_back(self, monkeypatch):
        fake_interfaces(monkeypatch, {})
        assert discover_local_ipv4() == "127.0.0.1"

    @pytest.mark.parametrize("exc", [ValueError("bad iface"), OSError("ioctl failed")])
    def test_enumeration_errors_fall_back(self, monkeypatch, exc):
        def boom():
            raise exc

        monkeypatch.setattr(localip.netifaces, "interfaces", boom)
        assert discover_local_ipv4() == LOOPBACK_IP

    def test_real_interfaces_give_ipv4(self):
        ip = discover_local_ipv4()
        assert len(ip.split(".")) == 4
