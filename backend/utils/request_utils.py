"""
Validation of JSON bodies shared by the query endpoints.
"""


def parse_window_request(data: dict):
    """
    Read file_id, curve_names, depth_min, depth_max from a request body.
    Returns ((file_id, curve_names, depth_min, depth_max), None) or (None, error message).
    """
    file_id = data.get("file_id")
    curve_names = data.get("curve_names", [])
    depth_min = data.get("depth_min")
    depth_max = data.get("depth_max")

    if not file_id:
        return None, "file_id is required"
    if not curve_names:
        return None, "curve_names is required"
    if isinstance(curve_names, str):
        curve_names = [c.strip() for c in curve_names.split(",") if c.strip()]
    if not isinstance(curve_names, list) or not all(isinstance(c, str) for c in curve_names):
        return None, "curve_names must be a list of names"
    if depth_min is None or depth_max is None:
        return None, "depth_min and depth_max are required"
    try:
        file_id = int(file_id)
        depth_min = float(depth_min)
        depth_max = float(depth_max)
    except (ValueError, TypeError):
        return None, "file_id must be an integer and depth_min/depth_max numbers"
    if depth_min > depth_max:
        depth_min, depth_max = depth_max, depth_min
    return (file_id, curve_names, depth_min, depth_max), None
