"""Static question banks and lesson catalog (JSON)."""
