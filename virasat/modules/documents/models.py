# Supabase Storage bucket: documents (or S3 bucket S3_BUCKET_NAME)
# Supabase table: documents
# This file documents the expected storage layout and table schema
# Actual operations are handled in storage.py and service.py

"""
Object keys:
- {user_id}/{upload_ms}-{original_filename}
  upload_ms only keeps keys unique; the display name is the part after the first "-"

Bucket policy (private bucket, owner folder only):
    create policy "owner_documents" on storage.objects for all
        using (bucket_id = 'documents' and (storage.foldername(name))[1] = auth.uid()::text)
        with check (bucket_id = 'documents' and (storage.foldername(name))[1] = auth.uid()::text);

documents table (category persisted at upload time):
- id: bigint (primary key, generated)
- user_id: uuid (references auth.users.id, not null)
- path: text (unique, not null) - object key
- name: text (not null) - original filename
- category: text (not null)
- size: bigint
- content_type: text (nullable)
- created_at: timestamptz (default: now())

Objects with no documents row (uploaded before the table existed, or whose
row insert failed) get a category guessed from filename keywords.
"""
