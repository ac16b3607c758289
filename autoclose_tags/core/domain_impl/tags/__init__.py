"""Tag domain package: detection, balance scanning and the auto-close engine."""
