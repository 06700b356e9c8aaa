def first_present(data: dict, keys):
    """Value of the first key that is present and not None."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None
