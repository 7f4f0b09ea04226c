"""
Add unique constraint on applications (student_id, job_offer_id)

For databases created before the constraint existed: duplicates are removed
first, keeping the earliest application of each pair.
"""
import asyncio

from sqlalchemy import text

from internship_portal.core.database import engine


async def add_unique_constraint():
    """Add unique constraint on applications for (student_id, job_offer_id)"""
    async with engine.begin() as conn:
        try:
            check_query = """
            SELECT constraint_name
            FROM information_schema.table_constraints
            WHERE table_name = 'applications'
            AND constraint_type = 'UNIQUE'
            AND constraint_name = 'uq_applications_student_id_job_offer_id';
            """
            result = await conn.execute(text(check_query))
            if result.fetchone():
                print("✅ Unique constraint already exists.")
                return

            print("🧹 Removing duplicate applications...")
            cleanup_query = """
            DELETE FROM applications
            WHERE id NOT IN (
                SELECT DISTINCT ON (student_id, job_offer_id) id
                FROM applications
                ORDER BY student_id, job_offer_id, submitted_at ASC, id ASC
            );
            """
            result = await conn.execute(text(cleanup_query))
            print(f"Deleted {result.rowcount} duplicate entries")

            print("Adding unique constraint...")
            await conn.execute(text("""
                ALTER TABLE applications
                ADD CONSTRAINT uq_applications_student_id_job_offer_id
                UNIQUE (student_id, job_offer_id);
            """))

            print("✅ Unique constraint added successfully")

        except Exception as e:
            print(f"❌ Error: {e}")
            raise

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(add_unique_constraint())
