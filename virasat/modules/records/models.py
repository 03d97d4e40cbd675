# Supabase tables: bank_accounts, investments, insurance_policies, health_records,
# medications, passwords, security_questions, properties, vehicles, nominees
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in engine.py
# Field lists per table live in virasat/config/entities_config.py

"""
Expected Supabase table structure (same bookkeeping columns on every table):
- id: bigint (primary key, generated)
- user_id: uuid (references auth.users.id, not null) - owner, never updated
- created_at: timestamptz (default: now())
- updated_at: timestamptz (default: now())
- <family fields>: text - amounts and dates are display strings ("₹2,50,000")
- status / category: text with a default; allowed labels are a UI hint only

There are no foreign keys between record tables; nominees are not linked to
the records they may inherit.

Required row-level security (the API filters by user_id as well, but the
filter alone is not an authorization boundary):

    alter table <table> enable row level security;
    create policy "owner_select" on <table> for select using (auth.uid() = user_id);
    create policy "owner_insert" on <table> for insert with check (auth.uid() = user_id);
    create policy "owner_update" on <table> for update using (auth.uid() = user_id)
        with check (auth.uid() = user_id);
    create policy "owner_delete" on <table> for delete using (auth.uid() = user_id);

profiles (used by signup to detect an email that is already registered):
- id: uuid (primary key)
- user_id: uuid (references auth.users.id, not null)
- email, full_name, phone: text (nullable)
- created_at / updated_at: timestamptz
"""
