"""Minimal example flattening an event payload before rule lookup."""

from kv_flatten import Flattener, unflatten


def main() -> None:
    """Flatten a nested event, look up composite keys, then rebuild it."""
    event = {
        "type": "analytics.track",
        "context": {"device": {"type": "mobile", "os": {"name": "iOS"}}},
        "xdm": {"commerce": {"order": {"total": 19.99, "items": ["sku-1", "sku-2"]}}},
    }
    flattener = Flattener()
    flat = flattener(event)
    print(f"{flattener=}")
    for key, value in flat.items():
        print(f"{key} = {value!r}")

    print("device type:", flat.get("context.device.type"))
    print("rebuilt matches:", unflatten(flat) == event)

    escaped = Flattener(policy="escape")({"a.b": 1, "a": {"b": 2}})
    print("escaped:", escaped)


if __name__ == "__main__":
    main()
