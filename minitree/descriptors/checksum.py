"""
The descriptor checksum, as specified in BIP380.
"""

INPUT_CHARSET = "0123456789()[],'/*abcdefgh@:$%{}IJKLMNOPQRSTUVWXYZ&+-.;<=>?!^_|~ijklmnopqrstuvwxyzABCDEFGH`#\"\\ "
CHECKSUM_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
GENERATOR = [0xF5DEE51989, 0xA9FDCA3312, 0x1BAB10E32D, 0x3706B1677A, 0x644D626FFD]


def descsum_polymod(symbols):
    """Internal function that computes the descriptor checksum."""
    chk = 1
    for value in symbols:
        top = chk >> 35
        chk = (chk & 0x7FFFFFFFF) << 5 ^ value
        for i in range(5):
            chk ^= GENERATOR[i] if ((top >> i) & 1) else 0
    return chk


def descsum_expand(s):
    """Internal function that does the character to symbol expansion.

    Returns None if {s} contains a character outside of the descriptor charset.
    """
    groups = []
    symbols = []
    for c in s:
        v = INPUT_CHARSET.find(c)
        if v == -1:
            return None
        symbols.append(v & 31)
        groups.append(v >> 5)
        if len(groups) == 3:
            symbols.append(groups[0] * 9 + groups[1] * 3 + groups[2])
            groups = []
    if len(groups) == 1:
        symbols.append(groups[0])
    elif len(groups) == 2:
        symbols.append(groups[0] * 3 + groups[1])
    return symbols


def descsum_create(s):
    """Add a checksum to a descriptor without one."""
    symbols = descsum_expand(s)
    if symbols is None:
        raise ValueError(f"Invalid character in descriptor '{s}'")
    checksum = descsum_polymod(symbols + [0] * 8) ^ 1
    return (
        s
        + "#"
        + "".join(CHECKSUM_CHARSET[(checksum >> (5 * (7 - i))) & 31] for i in range(8))
    )


def descsum_check(s, require=True):
    """Verify that the checksum is correct in a descriptor.

    :param require: whether a missing checksum is a failure.
    """
    if "#" not in s:
        return not require
    if len(s) < 9 or s[-9] != "#":
        return False
    if not all(x in CHECKSUM_CHARSET for x in s[-8:]):
        return False
    symbols = descsum_expand(s[:-9])
    if symbols is None:
        return False
    symbols += [CHECKSUM_CHARSET.find(x) for x in s[-8:]]
    return descsum_polymod(symbols) == 1
