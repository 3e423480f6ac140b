"""Database engine setup and initialization."""

from pathlib import Path

import aiosqlite

from ..config import DATA_DIR


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "liferamp.db"


async def _run_migrations(db: aiosqlite.Connection) -> None:
    """Run database migrations for schema updates."""
    # gameplans.completed arrived after the first schema
    cursor = await db.execute("PRAGMA table_info(gameplans)")
    columns = {col[1] for col in await cursor.fetchall()}
    if "completed" not in columns:
        await db.execute("ALTER TABLE gameplans ADD COLUMN completed INTEGER DEFAULT 0")

    await db.commit()


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Profiles, keyed by the auth provider's user id
        await db.execute("""
            CREATE TABLE IF NOT EXISTS profiles (
                id TEXT PRIMARY KEY,
                full_name TEXT NOT NULL,
                role TEXT NOT NULL,
                gender TEXT NOT NULL,
                age INTEGER NOT NULL CHECK (age >= 1),
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS gameplans (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                topic TEXT NOT NULL,
                skill TEXT NOT NULL,
                completed INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS goals (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                gameplan_id INTEGER NOT NULL,
                description TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'not-started',
                start_date TEXT,
                FOREIGN KEY (gameplan_id) REFERENCES gameplans(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS flashcards (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                gameplan_id INTEGER NOT NULL,
                content TEXT NOT NULL,
                FOREIGN KEY (gameplan_id) REFERENCES gameplans(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS documents (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                file_path TEXT NOT NULL,
                file_url TEXT NOT NULL,
                topics TEXT DEFAULT '[]',
                skills TEXT DEFAULT '[]',
                uploaded_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_gameplans_user
            ON gameplans(user_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_goals_gameplan
            ON goals(gameplan_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_flashcards_gameplan
            ON flashcards(gameplan_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_documents_user
            ON documents(user_id)
        """)

        await db.commit()

        # Run migrations for existing databases
        await _run_migrations(db)
