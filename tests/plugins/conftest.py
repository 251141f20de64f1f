# The plugin package registers its tasks and extenders at import time, which
# needs a PylonContext with the builtin tasks. Import it once inside a throwaway
# context so that the test module can import `plugins.network_defaults.extenders`
# at collection; load_plugins() reloads it into each test's own context.
from pylon.builtin_tasks import register_builtin_tasks
from pylon.context import create_context, delete_context

register_builtin_tasks(create_context().tasks)
try:
    import plugins.network_defaults  # noqa: F401
finally:
    delete_context()
