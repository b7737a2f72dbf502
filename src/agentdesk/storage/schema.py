"""Database schema for the agentdesk store."""

SCHEMA = """
-- Index collection: one row per searchable chunk
CREATE TABLE IF NOT EXISTS chunks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    file_path TEXT NOT NULL,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    file_type TEXT NOT NULL,
    source_type TEXT NOT NULL,
    content_type TEXT NOT NULL DEFAULT 'document',
    line_number INTEGER,
    line_end INTEGER,
    context TEXT,
    last_indexed INTEGER NOT NULL   -- epoch ms
);

-- Full-text index over chunk content (rowid = chunks.id)
CREATE VIRTUAL TABLE IF NOT EXISTS chunks_fts USING fts5(
    content,
    tokenize='porter unicode61'
);

-- Activity log: append-only
CREATE TABLE IF NOT EXISTS activities (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp INTEGER NOT NULL,     -- epoch ms
    action_type TEXT NOT NULL,
    description TEXT NOT NULL,
    status TEXT NOT NULL,
    metadata TEXT,                  -- JSON object
    source TEXT NOT NULL DEFAULT 'agent'
);

-- Scheduled tasks shown on the calendar
CREATE TABLE IF NOT EXISTS scheduled_tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    schedule_type TEXT NOT NULL,
    schedule_expr TEXT,
    next_run_at INTEGER NOT NULL,
    last_run_at INTEGER,
    status TEXT NOT NULL DEFAULT 'active',
    payload TEXT
);

-- Calendar events
CREATE TABLE IF NOT EXISTS calendar_events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT,
    start_time INTEGER NOT NULL,
    end_time INTEGER,
    type TEXT NOT NULL,
    recurrence TEXT,
    status TEXT NOT NULL DEFAULT 'scheduled',
    metadata TEXT,                  -- JSON object
    source TEXT
);

-- Store metadata
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT
);

-- Indexes for efficient queries
CREATE INDEX IF NOT EXISTS idx_chunks_file ON chunks(file_path);
CREATE INDEX IF NOT EXISTS idx_activities_timestamp ON activities(timestamp);
CREATE INDEX IF NOT EXISTS idx_activities_type ON activities(action_type, timestamp);
CREATE INDEX IF NOT EXISTS idx_tasks_next_run ON scheduled_tasks(next_run_at);
CREATE INDEX IF NOT EXISTS idx_events_start ON calendar_events(start_time);
CREATE INDEX IF NOT EXISTS idx_events_type ON calendar_events(type);
"""
