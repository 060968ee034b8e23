from crypto.common.ec import Curve, Point


def serialize_point(point: Point) -> dict:
    """Converts an elliptic curve Point into a JSON-serializable dictionary.

    The coordinates are written as hexadecimal strings so that arbitrarily
    large field elements survive any JSON implementation. The point at
    infinity is flagged explicitly, since (0, 0) is itself a valid point of
    y^2 = x^3 + x.

    Args:
        point: The elliptic curve point to serialize.

    Returns:
        A dictionary representation of the point, or None if the input is None.
    """
    if point is None:
        return None
    if point.is_infinity:
        return {"is_infinity": True, "x": "0x0", "y": "0x0"}
    return {"is_infinity": False, "x": hex(point.x), "y": hex(point.y)}


def deserialize_point(data: dict, curve: Curve) -> Point:
    """Reconstructs an elliptic curve Point from its dictionary representation.

    This function is the inverse of serialize_point. The curve is not part of
    the encoding and has to be supplied by the caller, usually from the group
    context the point belongs to.

    Args:
        data: The dictionary representation of the point.
        curve: The curve the point lies on.

    Returns:
        The deserialized point, or None if the input is None.

    Raises:
        ValueError: If the coordinates do not describe a point of `curve`.
    """
    if data is None:
        return None
    if data.get("is_infinity", False):
        return Point.infinity(curve)
    x = int(data["x"], 16)
    y = int(data["y"], 16)
    return Point(x, y, curve)
