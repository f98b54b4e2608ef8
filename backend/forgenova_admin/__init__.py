"""ForgeNova admin API: admin authorization and settings management over
Supabase."""
