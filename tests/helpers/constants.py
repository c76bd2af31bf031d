"""Reference values for exp / ln (18-decimal inputs and outputs).

These are the bit-exact outputs of the 96-bit rational approximations; any
change to a constant or to the evaluation order shows up here.
"""

# (x, exp(x))
EXP_CASES = [
    (-42139678854452767550, 0),
    (-41446531673892822313, 0),
    (-20 * 10**18, 2061153622),
    (-3 * 10**18, 49787068367863942),
    (-(10**18), 367879441171442321),
    (0, 10**18),
    (1, 10**18 + 1),
    (5 * 10**17, 1648721270700128146),
    (693147180559945309, 1999999999999999999),
    (10**18, 2718281828459045235),
    (2 * 10**18, 7389056098930650227),
    (10 * 10**18, 22026465794806716516980),
    (50 * 10**18, 5184705528587072464148529318587763226117),
    (100 * 10**18, 26881171418161354484134666106240937146178367581647816351662017),
    (
        135305999368893231588,
        57896044618658097650144101621524338577433870140581303254786265309376407432913,
    ),
]

# (x, ln(x))
LN_CASES = [
    (1, -41446531673892822313),
    (2, -40753384493332877003),
    (5 * 10**17, -693147180559945310),
    (999999999999999999, -1),
    (10**18, 0),
    (1000000000000000001, 1),
    (2 * 10**18, 693147180559945309),
    (2718281828459045235, 999999999999999999),
    (3 * 10**18, 1098612288668109691),
    (10 * 10**18, 2302585092994045683),
    (123_456_789 * 10**12, 4815891208203743929),
    (10**24, 13815510557964274104),
    (2**255 - 1, 135305999368893231589),
]
