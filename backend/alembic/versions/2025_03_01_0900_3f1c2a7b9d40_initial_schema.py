"""initial_schema

Revision ID: 3f1c2a7b9d40
Revises:
Create Date: 2025-03-01 09:00:00.000000

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2a7b9d40'
down_revision = None
branch_labels = None
depends_on = None

# Enum types are created once up front; several tables share them
_enum_metadata = sa.MetaData()
_expiration_status = sa.Enum(
    'VALID', 'EXPIRING_SOON', 'EXPIRED', 'NO_ITEMS',
    name='ExpirationStatus', metadata=_enum_metadata,
)
_shift = sa.Enum('AM', 'PM', name='Shift', metadata=_enum_metadata)
_fire_drill_type = sa.Enum('ANNOUNCED', 'UNANNOUNCED', name='FireDrillType', metadata=_enum_metadata)
_drill_type = sa.Enum('EVACUATION', 'DISASTER', name='DrillType', metadata=_enum_metadata)
_quarter = sa.Enum('Q1', 'Q2', 'Q3', 'Q4', name='Quarter', metadata=_enum_metadata)
_ENUMS = (_expiration_status, _shift, _fire_drill_type, _drill_type, _quarter)


def _expirable_columns():
    return [
        sa.Column('expiresAt', sa.Date(), nullable=True),
        sa.Column('noExpiration', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('status', _expiration_status, nullable=True),
        sa.Column('uploadedAt', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    ]


def _facility_fk():
    return sa.Column(
        'facilityId', sa.Text(),
        sa.ForeignKey('Facility.id', onupdate='CASCADE', ondelete='CASCADE'),
        nullable=False,
    )


def upgrade():
    bind = op.get_bind()
    for enum_type in _ENUMS:
        enum_type.create(bind, checkfirst=True)

    op.create_table(
        'Facility',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('bhpId', sa.Text(), nullable=False),
        sa.Column('createdAt', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='Facility_pkey'),
    )
    op.create_index('Facility_bhpId_idx', 'Facility', ['bhpId'])

    op.create_table(
        'Employee',
        sa.Column('id', sa.Text(), nullable=False),
        _facility_fk(),
        sa.Column('firstName', sa.Text(), nullable=False),
        sa.Column('lastName', sa.Text(), nullable=False),
        sa.Column('position', sa.Text(), nullable=True),
        sa.Column('isActive', sa.Boolean(), server_default=sa.true(), nullable=True),
        sa.Column('createdAt', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='Employee_pkey'),
    )
    op.create_index('Employee_facilityId_idx', 'Employee', ['facilityId'])

    op.create_table(
        'EmployeeDocument',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column(
            'employeeId', sa.Text(),
            sa.ForeignKey('Employee.id', onupdate='CASCADE', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('issuedAt', sa.Date(), nullable=True),
        *_expirable_columns(),
        sa.PrimaryKeyConstraint('id', name='EmployeeDocument_pkey'),
    )
    op.create_index('EmployeeDocument_employeeId_idx', 'EmployeeDocument', ['employeeId'])
    op.create_index('EmployeeDocument_expiresAt_idx', 'EmployeeDocument', ['expiresAt'])

    op.create_table(
        'FacilityDocument',
        sa.Column('id', sa.Text(), nullable=False),
        _facility_fk(),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('category', sa.Text(), nullable=True),
        *_expirable_columns(),
        sa.PrimaryKeyConstraint('id', name='FacilityDocument_pkey'),
    )
    op.create_index('FacilityDocument_facilityId_idx', 'FacilityDocument', ['facilityId'])

    op.create_table(
        'Credential',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('bhpId', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('credentialType', sa.Text(), nullable=True),
        *_expirable_columns(),
        sa.PrimaryKeyConstraint('id', name='Credential_pkey'),
    )
    op.create_index('Credential_bhpId_idx', 'Credential', ['bhpId'])

    op.create_table(
        'FireDrillReport',
        sa.Column('id', sa.Text(), nullable=False),
        _facility_fk(),
        sa.Column('reportYear', sa.Integer(), nullable=False),
        sa.Column('reportMonth', sa.Integer(), nullable=False),
        sa.Column('shift', _shift, nullable=False),
        sa.Column('drillDate', sa.Date(), nullable=False),
        sa.Column('drillTime', sa.Text(), nullable=True),
        sa.Column('drillType', _fire_drill_type, nullable=False),
        sa.Column('conductedBy', sa.Text(), nullable=False),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.Column('submittedBy', sa.Text(), nullable=True),
        sa.Column('createdAt', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='FireDrillReport_pkey'),
        sa.UniqueConstraint(
            'facilityId', 'reportMonth', 'reportYear', 'shift',
            name='FireDrillReport_facilityId_reportMonth_reportYear_shift_key',
        ),
    )

    op.create_table(
        'EvacuationDrillReport',
        sa.Column('id', sa.Text(), nullable=False),
        _facility_fk(),
        sa.Column('drillType', _drill_type, nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('quarter', _quarter, nullable=False),
        sa.Column('shift', _shift, nullable=False),
        sa.Column('drillDate', sa.Date(), nullable=False),
        sa.Column('drillTime', sa.Text(), nullable=True),
        sa.Column('disasterDrillType', sa.Text(), nullable=True),
        sa.Column('conductedBy', sa.Text(), nullable=True),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.Column('submittedBy', sa.Text(), nullable=True),
        sa.Column('createdAt', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='EvacuationDrillReport_pkey'),
        sa.UniqueConstraint(
            'facilityId', 'drillType', 'quarter', 'year', 'shift',
            name='EvacuationDrillReport_facilityId_drillType_quarter_year_shift_key',
        ),
    )

    op.create_table(
        'OversightTrainingReport',
        sa.Column('id', sa.Text(), nullable=False),
        _facility_fk(),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('biWeek', sa.Integer(), nullable=False),
        sa.Column('trainingDate', sa.Date(), nullable=False),
        sa.Column('conductedBy', sa.Text(), nullable=False),
        sa.Column('participants', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('submittedBy', sa.Text(), nullable=True),
        sa.Column('createdAt', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='OversightTrainingReport_pkey'),
        sa.UniqueConstraint(
            'facilityId', 'biWeek', 'year',
            name='OversightTrainingReport_facilityId_biWeek_year_key',
        ),
    )


def downgrade():
    for table in (
        'OversightTrainingReport',
        'EvacuationDrillReport',
        'FireDrillReport',
        'Credential',
        'FacilityDocument',
        'EmployeeDocument',
        'Employee',
        'Facility',
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in _ENUMS:
        enum_type.drop(bind, checkfirst=True)
