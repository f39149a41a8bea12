"""Dashboard module - Admin statistics and global search."""
