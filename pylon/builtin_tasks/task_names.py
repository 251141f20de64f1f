TASK_HELP = "help"
TASK_CONFIG = "config"
TASK_NETWORK = "network"

# Tasks that run outside of a project and without a configured network.
SETUP_TASKS = frozenset({TASK_HELP})


def is_setup_task(task_name: str) -> bool:
    return task_name in SETUP_TASKS
