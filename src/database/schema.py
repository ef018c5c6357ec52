"""
Table definitions shared by the SQL and in-memory entity stores
"""

# Columns callers may read or write, per table. "id" is assigned by the store.
TABLE_COLUMNS = {
    "cars": (
        "name", "brand", "price", "available", "image_url", "description",
        "acceleration", "consumption", "power", "reservations_count", "vote",
    ),
    "customers": ("name", "phone", "email", "reservations_count", "total_spent"),
    "reservations": ("customer_id", "car_id", "start_date", "end_date", "total", "status"),
    "settings": (
        "site_name", "phone", "contact_email", "facebook", "instagram",
        "address", "gps", "maintenance_mode",
    ),
    "testimonials": ("name", "role", "content", "rating", "created_at"),
}

# Defaults applied on insert when a column is omitted
COLUMN_DEFAULTS = {
    "cars": {"reservations_count": 0, "vote": 0, "image_url": None},
    "customers": {"email": None, "reservations_count": 0, "total_spent": 0.0},
    "reservations": {"status": "pending"},
    "settings": {},
    "testimonials": {},
}

# child table -> {fk column: parent table}; deleting the parent removes the children
FOREIGN_KEYS = {
    "reservations": {"customer_id": "customers", "car_id": "cars"},
}

CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS cars (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL,
    brand TEXT NOT NULL,
    price DOUBLE PRECISION NOT NULL,
    available BOOLEAN NOT NULL,
    image_url TEXT,
    description TEXT,
    acceleration TEXT,
    consumption TEXT,
    power TEXT,
    reservations_count INTEGER NOT NULL DEFAULT 0,
    vote INTEGER DEFAULT 0
);
CREATE TABLE IF NOT EXISTS customers (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL,
    phone TEXT NOT NULL,
    email TEXT,
    reservations_count INTEGER NOT NULL DEFAULT 0,
    total_spent DOUBLE PRECISION NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS reservations (
    id SERIAL PRIMARY KEY,
    customer_id INTEGER NOT NULL REFERENCES customers(id) ON DELETE CASCADE,
    car_id INTEGER NOT NULL REFERENCES cars(id) ON DELETE CASCADE,
    start_date TEXT NOT NULL,
    end_date TEXT NOT NULL,
    total DOUBLE PRECISION NOT NULL,
    status TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS settings (
    id INTEGER PRIMARY KEY,
    site_name TEXT,
    phone TEXT,
    contact_email TEXT,
    facebook TEXT,
    instagram TEXT,
    address TEXT,
    gps TEXT,
    maintenance_mode BOOLEAN NOT NULL DEFAULT FALSE
);
CREATE TABLE IF NOT EXISTS testimonials (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL,
    role TEXT NOT NULL,
    content TEXT NOT NULL,
    rating INTEGER NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def check_columns(table: str, fields) -> None:
    """Raise ValueError for unknown tables or columns"""
    if table not in TABLE_COLUMNS:
        raise ValueError(f"Unknown table: {table}")
    allowed = TABLE_COLUMNS[table]
    unknown = [field for field in fields if field not in allowed and field != "id"]
    if unknown:
        raise ValueError(f"Unknown column(s) for {table}: {', '.join(unknown)}")
