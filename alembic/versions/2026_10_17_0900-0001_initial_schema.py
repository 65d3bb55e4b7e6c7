"""initial_schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17 09:00:00.000000+00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _base_columns():
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def _join_table(name: str, left: str, right: str) -> None:
    left_table, left_column = left.split('.')
    right_table, right_column = right.split('.')
    op.create_table(
        name,
        sa.Column(left_column, sa.Uuid(), nullable=False),
        sa.Column(right_column, sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint([left_column], [f'{left_table}.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint([right_column], [f'{right_table}.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint(left_column, right_column),
    )


def upgrade() -> None:
    """Create users, academic units, reference data, companies and jobs."""
    op.create_table(
        'users',
        *_base_columns(),
        sa.Column('username', sa.String(length=150), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('firstname', sa.String(length=150), nullable=True),
        sa.Column('lastname', sa.String(length=150), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('refresh_token_hash', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'faculties',
        *_base_columns(),
        sa.Column('name_th', sa.String(length=255), nullable=False),
        sa.Column('name_en', sa.String(length=255), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_faculties_id'), 'faculties', ['id'], unique=False)
    op.create_index(op.f('ix_faculties_code'), 'faculties', ['code'], unique=True)

    op.create_table(
        'departments',
        *_base_columns(),
        sa.Column('name_th', sa.String(length=255), nullable=False),
        sa.Column('name_en', sa.String(length=255), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('faculty_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['faculty_id'], ['faculties.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_departments_id'), 'departments', ['id'], unique=False)
    op.create_index(op.f('ix_departments_code'), 'departments', ['code'], unique=True)
    op.create_index(op.f('ix_departments_faculty_id'), 'departments', ['faculty_id'], unique=False)

    for table in ('industries', 'internship_types'):
        op.create_table(
            table,
            *_base_columns(),
            sa.Column('name_th', sa.String(length=255), nullable=False),
            sa.Column('name_en', sa.String(length=255), nullable=False),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f(f'ix_{table}_id'), table, ['id'], unique=False)
        op.create_index(op.f(f'ix_{table}_name_en'), table, ['name_en'], unique=False)

    op.create_table(
        'companies',
        *_base_columns(),
        sa.Column('name_th', sa.String(length=255), nullable=False),
        sa.Column('name_en', sa.String(length=255), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('sub_district', sa.String(length=255), nullable=False),
        sa.Column('district', sa.String(length=255), nullable=False),
        sa.Column('province', sa.String(length=255), nullable=False),
        sa.Column('postcode', sa.String(length=20), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('industry_id', sa.Uuid(), nullable=False),
        sa.Column('created_by_id', sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(['industry_id'], ['industries.id']),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_companies_id'), 'companies', ['id'], unique=False)
    op.create_index(op.f('ix_companies_name_th'), 'companies', ['name_th'], unique=False)
    op.create_index(op.f('ix_companies_name_en'), 'companies', ['name_en'], unique=False)

    op.create_table(
        'contacts',
        *_base_columns(),
        sa.Column('firstname', sa.String(length=150), nullable=False),
        sa.Column('lastname', sa.String(length=150), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('company_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_contacts_id'), 'contacts', ['id'], unique=False)
    op.create_index(op.f('ix_contacts_company_id'), 'contacts', ['company_id'], unique=False)

    op.create_table(
        'jobs',
        *_base_columns(),
        sa.Column('name_th', sa.String(length=500), nullable=False),
        sa.Column('name_en', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('requirement', sa.Text(), nullable=True),
        sa.Column('payment', sa.Float(), nullable=True),
        sa.Column('payment_type', sa.String(length=20), nullable=True),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=False),
        sa.Column('position_count', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('company_id', sa.Uuid(), nullable=False),
        sa.Column('internship_type_id', sa.Uuid(), nullable=False),
        sa.Column('created_by_id', sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['internship_type_id'], ['internship_types.id']),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_jobs_id'), 'jobs', ['id'], unique=False)
    op.create_index(op.f('ix_jobs_name_th'), 'jobs', ['name_th'], unique=False)
    op.create_index(op.f('ix_jobs_name_en'), 'jobs', ['name_en'], unique=False)
    op.create_index(op.f('ix_jobs_payment'), 'jobs', ['payment'], unique=False)
    op.create_index(op.f('ix_jobs_start_date'), 'jobs', ['start_date'], unique=False)
    op.create_index(op.f('ix_jobs_end_date'), 'jobs', ['end_date'], unique=False)

    _join_table('user_departments', 'users.user_id', 'departments.department_id')
    _join_table('company_faculties', 'companies.company_id', 'faculties.faculty_id')
    _join_table('company_departments', 'companies.company_id', 'departments.department_id')
    _join_table('job_faculties', 'jobs.job_id', 'faculties.faculty_id')
    _join_table('job_departments', 'jobs.job_id', 'departments.department_id')


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    for table in (
        'job_departments',
        'job_faculties',
        'company_departments',
        'company_faculties',
        'user_departments',
        'jobs',
        'contacts',
        'companies',
        'internship_types',
        'industries',
        'departments',
        'faculties',
        'users',
    ):
        op.drop_table(table)
