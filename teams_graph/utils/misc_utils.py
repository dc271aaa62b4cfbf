# teams_graph/utils/misc_utils.py


def generate_canonical_id(namespace: str, category: str, name: str) -> str:
    """Joins namespace, category and the space-stripped raw name with dots.

    The raw name is embedded as-is apart from spaces, so its prefix stays:
    ("giantswarm", "sig", "sig-foo") -> "giantswarm.sig.sig-foo".
    """
    return f"{namespace}.{category}.{name.replace(' ', '')}"
