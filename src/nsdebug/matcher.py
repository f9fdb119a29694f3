"""
Namespace template matching.

Templates are namespace strings that may contain ``*`` wildcards. A ``*``
matches any run of characters (including none). There is no ``?`` and no
character classes; every other character must match exactly, case included.

    matches("api:users", "api:*")      -> True
    matches("api:users", "*:users")    -> True
    matches("api", "api:*")            -> False
"""


def matches(candidate: str, template: str) -> bool:
    """Return True if ``candidate`` matches the wildcard ``template``.

    Greedy scan with backtracking: each ``*`` first matches nothing, and
    on a later mismatch the scan resumes one character further along from
    where the most recent ``*`` started matching.

    Args:
        candidate: Namespace being tested (e.g. "api:users")
        template: Pattern, possibly containing ``*`` (e.g. "api:*")

    Returns:
        True when the whole candidate is matched by the whole template
    """
    c_idx = 0
    t_idx = 0
    star_idx = -1
    match_idx = 0
    c_len = len(candidate)
    t_len = len(template)

    while c_idx < c_len:
        if t_idx < t_len and template[t_idx] == '*':
            star_idx = t_idx
            match_idx = c_idx
            t_idx += 1
        elif t_idx < t_len and template[t_idx] == candidate[c_idx]:
            c_idx += 1
            t_idx += 1
        elif star_idx != -1:
            # Let the last star swallow one more character and retry
            t_idx = star_idx + 1
            match_idx += 1
            c_idx = match_idx
        else:
            return False

    while t_idx < t_len and template[t_idx] == '*':
        t_idx += 1

    return t_idx == t_len


def matches_any(candidate: str, templates) -> bool:
    """Return True if ``candidate`` matches any template, scanned in order."""
    for template in templates:
        if matches(candidate, template):
            return True
    return False
