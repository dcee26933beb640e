from dataclasses import dataclass
from datetime import datetime

from Model.model_location import Location

AP_MODELS = {
    "AP-535": {
        "name": "Aruba AP-535",
        "ble_range": 150,
        "max_clients": 512,
        "bands": ["2.4GHz", "5GHz", "BLE", "IoT"],
    },
    "AP-503H": {
        "name": "Aruba AP-503H",
        "ble_range": 120,
        "max_clients": 256,
        "bands": ["2.4GHz", "5GHz", "BLE", "Zigbee"],
    },
}
AP_STATUSES = ("online", "offline", "maintenance")


@dataclass(frozen=True)
class AccessPoint:
    """Wireless access point used for BLE equipment tracking."""
    id: str
    name: str
    model: str
    location: Location
    status: str = "online"
    ble_range: int = 150
    clients: int = 0
    signal_strength: int = 100
    ip_address: str = ""
    mac_address: str = ""
    firmware_version: str = ""
    last_seen: str = ""

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "model": self.model,
            "model_info": AP_MODELS[self.model],
            "location": self.location.to_dict(),
            "status": self.status,
            "ble_range": self.ble_range,
            "clients": self.clients,
            "signal_strength": self.signal_strength,
            "ip_address": self.ip_address,
            "mac_address": self.mac_address,
            "firmware_version": self.firmware_version,
            "last_seen": self.last_seen,
        }

    @classmethod
    def create(cls, ap_id, data):
        model = data.get("model", "AP-535")
        if not isinstance(model, str) or model not in AP_MODELS:
            raise ValueError(f"Unknown access point model: {model}")
        status = data.get("status", "online")
        if status not in AP_STATUSES:
            raise ValueError(f"Unknown access point status: {status}")

        return cls(
            id=ap_id,
            name=data.get("name") or f"{AP_MODELS[model]['name']} {ap_id}",
            model=model,
            location=Location.from_dict(data.get("location") or {}),
            status=status,
            ble_range=data.get("ble_range") or AP_MODELS[model]["ble_range"],
            clients=data.get("clients", 0),
            signal_strength=data.get("signal_strength", 100),
            ip_address=data.get("ip_address", ""),
            mac_address=data.get("mac_address", ""),
            firmware_version=data.get("firmware_version", ""),
            last_seen=data.get("last_seen") or datetime.now().isoformat(timespec="seconds"),
        )
