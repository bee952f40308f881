"""Create analysis_records table

Critical-analysis record of a calibration certificate, including the
evaluated calibration points and the embedded conformity assessment.

Revision ID: 20261018_analysis_records
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261018_analysis_records'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


STATUS_COLUMNS = [
    'validity_status',
    'responsible_status',
    'accredited_lab_status',
    'adequate_scope_status',
    'accreditation_symbol_status',
    'measurement_results_status',
    'uncertainties_status',
    'conformity_status',
    'traceability_status',
    'standards_status',
    'certificates_status',
    'overall_status',
]

TEXT_COLUMNS = [
    'analysis_date', 'analyzed_by', 'approved_by',
    'certificate_number', 'issuing_laboratory', 'issue_date', 'calibration_date',
    'calibration_validity', 'validity_observations', 'technical_responsible',
    'responsible_observations',
    'accredited_lab_observations', 'adequate_scope_observations',
    'accreditation_symbol_observations',
    'equipment_type', 'manufacturer_model', 'serial_number', 'tag_id_internal',
    'application', 'location',
    'location_adequate', 'location_observations',
    'measurement_results_observations', 'uncertainties_observations',
    'conformity_observations', 'results_comments',
    'traceability_observations', 'standards_observations', 'certificates_observations',
    'final_comments',
]

JSON_COLUMNS = [
    'environmental_conditions',
    'calibration_range',
    'operational_range',
    'calibration_points',
    'conformity_assessment',
]


def upgrade() -> None:
    """Upgrade schema."""
    columns = [
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('document_code', sa.String(50), nullable=True),
        sa.Column('version', sa.String(10), nullable=True),
        sa.Column('calibration_location', sa.String(20), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]
    columns += [sa.Column(name, sa.Text(), nullable=True) for name in TEXT_COLUMNS]
    columns += [sa.Column(name, sa.String(20), nullable=True) for name in STATUS_COLUMNS]
    columns += [sa.Column(name, sa.JSON(), nullable=True) for name in JSON_COLUMNS]

    op.create_table(
        'analysis_records',
        *columns,
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_analysis_records_id', 'analysis_records', ['id'])
    op.create_index(
        'ix_analysis_records_certificate_number', 'analysis_records', ['certificate_number']
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_analysis_records_certificate_number', 'analysis_records')
    op.drop_index('ix_analysis_records_id', 'analysis_records')
    op.drop_table('analysis_records')
