"""Linear scales between a data domain and a drawing range."""


def map_linear(value: float, domain_min: float, domain_max: float,
               range_min: float, range_max: float) -> float:
    """
    Map 'value' from [domain_min, domain_max] onto [range_min, range_max].

    A collapsed domain (domain_min == domain_max) maps every value to the
    midpoint of the range. Ranges may be inverted (range_min > range_max),
    which is how pixel-y axes put larger values higher up.
    """
    if domain_max == domain_min:
        return (range_min + range_max) / 2
    t = (value - domain_min) / (domain_max - domain_min)
    if t == 1:
        return range_max
    return range_min + t * (range_max - range_min)


def index_scale(index: int, count: int, start: float, end: float) -> float:
    """Spread 'count' evenly spaced positions across [start, end]."""
    return map_linear(index, 0, count - 1, start, end)


def value_scale(value: float, max_value: float, bottom: float, top: float) -> float:
    """Map 0..max_value onto a pixel axis running from 'bottom' up to 'top'."""
    return map_linear(value, 0, max_value, bottom, top)
