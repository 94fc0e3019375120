"""
What we know about Miniscript fragment names, for display purposes only.

None of this is a grammar: names missing from these tables are parsed just the
same, they only get a plainer rendering.
"""

# The single-character wrappers, as in "vc:pk_k(A)".
WRAPPERS = "asctdvjnlu"

# Fragments whose first argument is a count and the others are uniform children.
COUNT_FIRST = {"thresh", "multi", "multi_a", "sortedmulti", "sortedmulti_a"}

# Fragments whose arguments are keys.
KEY_FRAGMENTS = {
    "pk",
    "pkh",
    "pk_k",
    "pk_h",
    "multi",
    "multi_a",
    "sortedmulti",
    "sortedmulti_a",
}

NOTES = {
    "pk": "signature check",
    "pk_k": "signature check",
    "pkh": "key hash check",
    "pk_h": "key hash check",
    "older": "relative timelock (OP_CHECKSEQUENCEVERIFY)",
    "after": "absolute timelock (OP_CHECKLOCKTIMEVERIFY)",
    "sha256": "hash preimage check",
    "hash256": "hash preimage check",
    "ripemd160": "hash preimage check",
    "hash160": "hash preimage check",
    "and_v": "verified conjunction",
    "and_b": "boolean conjunction",
    "and_n": "uses a conditional branch",
    "or_b": "boolean disjunction",
    "or_c": "uses a conditional branch",
    "or_d": "uses a conditional branch",
    "or_i": "uses a conditional branch",
    "andor": "uses a conditional branch",
    "thresh": "k-of-n threshold",
    "multi": "uses a multi-check operation (OP_CHECKMULTISIG)",
    "sortedmulti": "uses a multi-check operation (OP_CHECKMULTISIG)",
    "multi_a": "uses a multi-check operation (OP_CHECKSIGADD)",
    "sortedmulti_a": "uses a multi-check operation (OP_CHECKSIGADD)",
}


def fragment_note(name):
    """Get the display note for this fragment name, None if we have none."""
    return NOTES.get(name)
