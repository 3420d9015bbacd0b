"""UI constants for The Todo front end."""

APP_TITLE = "The Todo"

# Notification settings
NOTIFICATION_TIMEOUT_MEDIUM = 3

# Worker groups
REFRESH_WORKER_GROUP = "refresh"
MUTATION_WORKER_GROUP = "mutations"

# Widget ids
NEW_TODO_INPUT_ID = "new-todo"
TODO_LIST_ID = "todo-list"
STATUS_BAR_ID = "status-bar"
