"""
SQL schema for the audio sharing tables.
Run these queries in your Supabase SQL editor.
"""

CREATE_AUDIO_FILES_TABLE = """
-- Audio files table
CREATE TABLE IF NOT EXISTS audio_files (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    file_name VARCHAR(32) UNIQUE NOT NULL,
    original_name VARCHAR(100) NOT NULL DEFAULT '',
    file_size BIGINT NOT NULL CHECK (file_size > 0),
    mime_type VARCHAR(100) NOT NULL DEFAULT '',
    storage_path TEXT NOT NULL,
    created_at TIMESTAMPTZ DEFAULT NOW(),
    download_count INTEGER NOT NULL DEFAULT 0,
    is_active BOOLEAN DEFAULT TRUE,
    CONSTRAINT file_name_format CHECK (file_name ~ '^[A-Za-z0-9_-]{1,10}\\.[a-z0-9]+$')
);

-- Share lookups match on file_name prefix
CREATE INDEX IF NOT EXISTS idx_audio_files_file_name ON audio_files(file_name text_pattern_ops);
CREATE INDEX IF NOT EXISTS idx_audio_files_is_active ON audio_files(is_active);

-- Enable Row Level Security
ALTER TABLE audio_files ENABLE ROW LEVEL SECURITY;

-- Policy: Service role can do everything (for API)
CREATE POLICY audio_files_service_role_all ON audio_files
    FOR ALL
    USING (auth.role() = 'service_role');
"""

CREATE_UPLOAD_RATE_LIMITS_TABLE = """
-- Upload attempts, used by the shared rate limit backend
CREATE TABLE IF NOT EXISTS upload_rate_limits (
    id BIGSERIAL PRIMARY KEY,
    client_key TEXT NOT NULL,
    created_at TIMESTAMPTZ DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS idx_upload_rate_limits_key_created
    ON upload_rate_limits(client_key, created_at);

ALTER TABLE upload_rate_limits ENABLE ROW LEVEL SECURITY;

CREATE POLICY upload_rate_limits_service_role_all ON upload_rate_limits
    FOR ALL
    USING (auth.role() = 'service_role');
"""

CREATE_STORAGE_BUCKET = """
-- Public bucket holding the audio objects
INSERT INTO storage.buckets (id, name, public)
VALUES ('audio-storage', 'audio-storage', true)
ON CONFLICT (id) DO NOTHING;
"""

FULL_SCHEMA_SETUP = f"""
-- =====================================================
-- Voicerly Schema Setup
-- =====================================================
-- Run this in your Supabase SQL Editor
-- =====================================================

{CREATE_AUDIO_FILES_TABLE}

{CREATE_UPLOAD_RATE_LIMITS_TABLE}

{CREATE_STORAGE_BUCKET}
"""

if __name__ == "__main__":
    print(FULL_SCHEMA_SETUP)
