"""Process exit codes of the taskmaster CLI.

Scripts driving the CLI can branch on these instead of parsing error text.
"""

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2
ERROR_AUTH_FAILURE = 3
ERROR_STORE_FAILURE = 4
ERROR_NOT_FOUND = 5

# code -> (name, description)
_CODES = {
    SUCCESS: ("SUCCESS", "Command executed successfully"),
    ERROR_GENERAL: ("ERROR_GENERAL", "Unexpected failure, see the log file"),
    ERROR_INVALID_ARGS: ("ERROR_INVALID_ARGS", "Invalid arguments or field values"),
    ERROR_AUTH_FAILURE: ("ERROR_AUTH_FAILURE", "No usable active user, run 'taskmaster users use'"),
    ERROR_STORE_FAILURE: ("ERROR_STORE_FAILURE", "The task database could not be read or written"),
    ERROR_NOT_FOUND: ("ERROR_NOT_FOUND", "Task or user not found"),
}


def get_exit_code_name(code: int) -> str:
    return _CODES[code][0] if code in _CODES else f"UNKNOWN({code})"


def get_exit_code_description(code: int) -> str:
    return _CODES[code][1] if code in _CODES else "Unknown error"
