import math

import autograd.numpy as np  # type: ignore

# Values outside this range are clamped, to keep exponentials finite
TOO_SMALL = -1.0e20
TOO_BIG   =  1.0e20

# exp(LOG_TOO_BIG) == TOO_BIG
LOG_TOO_BIG = math.log(TOO_BIG)

def bound(x):
    """
    Clamp a scalar or array to the range [TOO_SMALL, TOO_BIG].
    """
    return np.clip(x, TOO_SMALL, TOO_BIG)

def bound_exp(x):
    """
    Exponential clamped at TOO_BIG.

    Equivalent to 'bound(exp(x))', but the argument is capped before
    exponentiating, so no overflow (or warning) ever happens.
    """
    return np.exp(np.minimum(x, LOG_TOO_BIG))
