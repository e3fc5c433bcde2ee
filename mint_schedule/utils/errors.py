# mint_schedule/utils/errors.py
class ScheduleError(RuntimeError):
    """
    Base class for every error raised by the emission schedule.
    None of them is transient: nothing here is ever retried.
    """


class InvalidRate(ScheduleError):
    """
    Output rate outside [0, 1].
    """


class Unauthorized(ScheduleError):
    """
    Caller is not the owner of the schedule.
    """


class MisconfiguredSchedule(ScheduleError, ValueError):
    """
    Raised while building a ScheduleDefinition, or by advance() when a
    state does not fit the definition it is advanced under (e.g. a
    checkpoint taken under another terminal-phase policy).
    """


class UnmappedPool(MisconfiguredSchedule):
    """
    Pool missing from a share mapping, or an unknown pool name.
    """


class InvalidState(ScheduleError, ValueError):
    """
    ProgressState with a negative or non-finite supply, or a negative
    phase / cycle index.
    """


class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided config (times, pools, paths).
    Should NOT print traceback.
    """
