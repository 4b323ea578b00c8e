"""Table and index definitions for the local SQLite store.

The statements here are applied by the numbered migrations; nothing else
should create tables.
"""

from __future__ import annotations

# total_points and level are derived and only written by the stats
# recompute. current_streak is maintained outside the rewards engine.
USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    username TEXT NOT NULL UNIQUE,
    email TEXT,
    total_points INTEGER NOT NULL DEFAULT 0 CHECK (total_points >= 0),
    level INTEGER NOT NULL DEFAULT 1 CHECK (level >= 1),
    current_streak INTEGER NOT NULL DEFAULT 0 CHECK (current_streak >= 0),
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    title TEXT NOT NULL,
    scheduled_date DATE NOT NULL,
    scheduled_time TEXT NOT NULL,
    priority TEXT NOT NULL DEFAULT 'medium'
        CHECK (priority IN ('low', 'medium', 'high')),
    completed BOOLEAN NOT NULL DEFAULT 0,
    completed_at DATETIME,
    completed_on_time BOOLEAN,
    points_earned INTEGER NOT NULL DEFAULT 0 CHECK (points_earned >= 0),
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
)
"""

# Calendar listings, completion filters and the leaderboard
REPORTING_INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_tasks_user_date ON tasks(user_id, scheduled_date DESC)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_user_completed ON tasks(user_id, completed)",
    "CREATE INDEX IF NOT EXISTS idx_users_points ON users(total_points DESC)",
)
