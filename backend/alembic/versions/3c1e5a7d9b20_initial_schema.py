"""initial schema: users, farms, animals, treatment records, farm reports

Revision ID: 3c1e5a7d9b20
Revises:
Create Date: 2025-11-02 10:14:08.512304

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c1e5a7d9b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('FARMER', 'INSPECTOR', 'ADMIN', name='userrole')
animal_species = sa.Enum('CATTLE', 'SHEEP', 'GOAT', 'PIG', 'POULTRY', name='animalspecies')
animal_status = sa.Enum('ACTIVE', 'QUARANTINE', 'SOLD', 'DECEASED', name='animalstatus')
compliance_status = sa.Enum('COMPLIANT', 'WARNING', 'VIOLATION', 'PENDING', name='compliancestatus')
report_file_type = sa.Enum('PDF', 'EXCEL', 'CSV', name='reportfiletype')
report_type = sa.Enum('COMPLIANCE', 'INSPECTION', 'VETERINARY', name='reporttype')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('farm_id', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'farms',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('owner_name', sa.String(), nullable=False),
        sa.Column('registration_number', sa.String(), nullable=False),
        sa.Column('contact_email', sa.String(), nullable=False),
        sa.Column('contact_phone', sa.String(), nullable=False),
        sa.Column('total_animals', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_farms_registration_number'), 'farms', ['registration_number'], unique=True)

    op.create_table(
        'animals',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('farm_id', sa.String(), nullable=False),
        sa.Column('tag_number', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('species', animal_species, nullable=False),
        sa.Column('breed', sa.String(), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('weight', sa.Numeric(10, 2), nullable=True),
        sa.Column('status', animal_status, nullable=False),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_animals_farm_id'), 'animals', ['farm_id'], unique=False)
    op.create_index(op.f('ix_animals_tag_number'), 'animals', ['tag_number'], unique=True)

    op.create_table(
        'treatment_records',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('animal_id', sa.String(), nullable=False),
        sa.Column('farm_id', sa.String(), nullable=False),
        sa.Column('recorded_by', sa.String(), nullable=False),
        sa.Column('medicine_name', sa.String(), nullable=False),
        sa.Column('antimicrobial_type', sa.String(), nullable=False),
        sa.Column('dosage', sa.String(), nullable=False),
        sa.Column('unit', sa.String(), nullable=False),
        sa.Column('administered_by', sa.String(), nullable=False),
        sa.Column('administered_date', sa.Date(), nullable=False),
        sa.Column('purpose_of_treatment', sa.Text(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('withdrawal_period_days', sa.Integer(), nullable=False),
        sa.Column('withdrawal_end_date', sa.Date(), nullable=False),
        sa.Column('mrl_level', sa.Numeric(), nullable=True),
        sa.Column('compliance_status', compliance_status, nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_treatment_records_animal_id'), 'treatment_records', ['animal_id'], unique=False)
    op.create_index(op.f('ix_treatment_records_farm_id'), 'treatment_records', ['farm_id'], unique=False)

    op.create_table(
        'farm_reports',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('farm_id', sa.String(), nullable=False),
        sa.Column('file_name', sa.String(), nullable=False),
        sa.Column('file_type', report_file_type, nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('uploaded_by', sa.String(), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('report_type', report_type, nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_farm_reports_farm_id'), 'farm_reports', ['farm_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_farm_reports_farm_id'), table_name='farm_reports')
    op.drop_table('farm_reports')
    op.drop_index(op.f('ix_treatment_records_farm_id'), table_name='treatment_records')
    op.drop_index(op.f('ix_treatment_records_animal_id'), table_name='treatment_records')
    op.drop_table('treatment_records')
    op.drop_index(op.f('ix_animals_tag_number'), table_name='animals')
    op.drop_index(op.f('ix_animals_farm_id'), table_name='animals')
    op.drop_table('animals')
    op.drop_index(op.f('ix_farms_registration_number'), table_name='farms')
    op.drop_table('farms')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')

    for enum_type in (report_type, report_file_type, compliance_status, animal_status, animal_species, user_role):
        enum_type.drop(op.get_bind(), checkfirst=True)
