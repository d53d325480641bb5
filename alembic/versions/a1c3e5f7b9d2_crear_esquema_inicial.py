"""Crear esquema inicial: usuarios, clientes, terrenos, ventas, cuotas, historial y auditoría

Revision ID: a1c3e5f7b9d2
Revises: 
Create Date: 2026-10-19 10:12:31.402118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f7b9d2'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

estado_enum = sa.Enum('activo', 'inactivo', name='estadoenum')
rol_enum = sa.Enum('administrador', 'empleado', name='rolenum')
tipo_terreno_enum = sa.Enum('nicho', 'boveda', 'mausoleo', name='tipoterrenoenum')
estado_terreno_enum = sa.Enum('disponible', 'vendido', 'reservado', name='estadoterrenoenum')
tipo_pago_enum = sa.Enum('contado', 'credito', name='tipopagoenum')
estado_venta_enum = sa.Enum('activa', 'pagada', 'cancelada', name='estadoventaenum')
estado_cuota_enum = sa.Enum('pendiente', 'pagado', name='estadocuotaenum')


def upgrade() -> None:
    op.create_table('usuarios',
        sa.Column('usuario_id', sa.Integer(), nullable=False),
        sa.Column('nombre_usuario', sa.String(length=50), nullable=False),
        sa.Column('contraseña', sa.String(length=255), nullable=False),
        sa.Column('rol', rol_enum, nullable=False),
        sa.Column('estado', estado_enum, nullable=False),
        sa.Column('fecha_creacion', sa.DateTime(), nullable=True),
        sa.Column('fecha_modificacion', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('usuario_id')
    )
    op.create_index(op.f('ix_usuarios_usuario_id'), 'usuarios', ['usuario_id'], unique=False)
    op.create_index(op.f('ix_usuarios_nombre_usuario'), 'usuarios', ['nombre_usuario'], unique=True)

    op.create_table('clientes',
        sa.Column('cliente_id', sa.Integer(), nullable=False),
        sa.Column('nombre', sa.String(length=100), nullable=False),
        sa.Column('apellido', sa.String(length=100), nullable=False),
        sa.Column('cedula', sa.String(length=20), nullable=False),
        sa.Column('telefono', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=100), nullable=True),
        sa.Column('direccion', sa.Text(), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('cliente_id')
    )
    op.create_index(op.f('ix_clientes_cliente_id'), 'clientes', ['cliente_id'], unique=False)
    op.create_index(op.f('ix_clientes_cedula'), 'clientes', ['cedula'], unique=False)
    op.create_index(op.f('ix_clientes_activo'), 'clientes', ['activo'], unique=False)

    op.create_table('clientes_historial',
        sa.Column('historial_id', sa.Integer(), nullable=False),
        sa.Column('cliente_id_original', sa.Integer(), nullable=False),
        sa.Column('nombre', sa.String(length=100), nullable=False),
        sa.Column('apellido', sa.String(length=100), nullable=False),
        sa.Column('cedula', sa.String(length=20), nullable=False),
        sa.Column('telefono', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=100), nullable=True),
        sa.Column('direccion', sa.Text(), nullable=True),
        sa.Column('fecha_registro', sa.DateTime(), nullable=True),
        sa.Column('fecha_eliminacion', sa.DateTime(), nullable=False),
        sa.Column('motivo_eliminacion', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('historial_id')
    )
    op.create_index(op.f('ix_clientes_historial_historial_id'), 'clientes_historial', ['historial_id'], unique=False)
    op.create_index(op.f('ix_clientes_historial_cliente_id_original'), 'clientes_historial', ['cliente_id_original'], unique=False)
    op.create_index(op.f('ix_clientes_historial_fecha_eliminacion'), 'clientes_historial', ['fecha_eliminacion'], unique=False)

    op.create_table('terrenos',
        sa.Column('terreno_id', sa.Integer(), nullable=False),
        sa.Column('numero_lote', sa.String(length=20), nullable=False),
        sa.Column('seccion', sa.String(length=20), nullable=False),
        sa.Column('manzana', sa.String(length=20), nullable=False),
        sa.Column('precio', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.Column('tipo', tipo_terreno_enum, nullable=False),
        sa.Column('estado', estado_terreno_enum, nullable=False),
        sa.Column('dimensiones', sa.String(length=50), nullable=True),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('precio >= 0', name='chk_precio_terreno_no_negativo'),
        sa.PrimaryKeyConstraint('terreno_id'),
        sa.UniqueConstraint('seccion', 'manzana', 'numero_lote', name='uq_terreno_ubicacion')
    )
    op.create_index(op.f('ix_terrenos_terreno_id'), 'terrenos', ['terreno_id'], unique=False)
    op.create_index(op.f('ix_terrenos_estado'), 'terrenos', ['estado'], unique=False)

    op.create_table('ventas',
        sa.Column('venta_id', sa.Integer(), nullable=False),
        sa.Column('cliente_id', sa.Integer(), nullable=False),
        sa.Column('terreno_id', sa.Integer(), nullable=False),
        sa.Column('precio_total', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.Column('tipo_pago', tipo_pago_enum, nullable=False),
        sa.Column('fecha_venta', sa.TIMESTAMP(), nullable=False),
        sa.Column('estado', estado_venta_enum, nullable=False),
        sa.Column('observaciones', sa.Text(), nullable=True),
        sa.Column('num_cuotas', sa.Integer(), nullable=True),
        sa.Column('tasa_interes_anual', sa.DECIMAL(precision=5, scale=2), nullable=True),
        sa.Column('creado_por', sa.Integer(), nullable=True),
        sa.Column('modificado_por', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('precio_total > 0', name='chk_precio_total_positivo'),
        sa.ForeignKeyConstraint(['cliente_id'], ['clientes.cliente_id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['terreno_id'], ['terrenos.terreno_id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['creado_por'], ['usuarios.usuario_id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['modificado_por'], ['usuarios.usuario_id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('venta_id')
    )
    op.create_index(op.f('ix_ventas_venta_id'), 'ventas', ['venta_id'], unique=False)
    op.create_index(op.f('ix_ventas_cliente_id'), 'ventas', ['cliente_id'], unique=False)
    op.create_index(op.f('ix_ventas_terreno_id'), 'ventas', ['terreno_id'], unique=False)
    op.create_index(op.f('ix_ventas_fecha_venta'), 'ventas', ['fecha_venta'], unique=False)
    op.create_index(op.f('ix_ventas_estado'), 'ventas', ['estado'], unique=False)

    op.create_table('pagos_credito',
        sa.Column('pago_id', sa.Integer(), nullable=False),
        sa.Column('venta_id', sa.Integer(), nullable=False),
        sa.Column('numero_cuota', sa.Integer(), nullable=False),
        sa.Column('monto_cuota', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.Column('monto_capital', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.Column('interes_aplicado', sa.DECIMAL(precision=12, scale=2), nullable=True),
        sa.Column('fecha_vencimiento', sa.Date(), nullable=False),
        sa.Column('estado', estado_cuota_enum, nullable=False),
        sa.Column('fecha_pago', sa.DateTime(), nullable=True),
        sa.Column('monto_pagado', sa.DECIMAL(precision=12, scale=2), nullable=True),
        sa.CheckConstraint('numero_cuota >= 1', name='chk_numero_cuota_positivo'),
        sa.CheckConstraint('monto_cuota >= 0', name='chk_monto_cuota_no_negativo'),
        sa.ForeignKeyConstraint(['venta_id'], ['ventas.venta_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('pago_id'),
        sa.UniqueConstraint('venta_id', 'numero_cuota', name='uq_pago_credito_venta_numero')
    )
    op.create_index(op.f('ix_pagos_credito_pago_id'), 'pagos_credito', ['pago_id'], unique=False)
    op.create_index(op.f('ix_pagos_credito_venta_id'), 'pagos_credito', ['venta_id'], unique=False)
    op.create_index(op.f('ix_pagos_credito_fecha_vencimiento'), 'pagos_credito', ['fecha_vencimiento'], unique=False)
    op.create_index(op.f('ix_pagos_credito_estado'), 'pagos_credito', ['estado'], unique=False)
    op.create_index(op.f('ix_pagos_credito_fecha_pago'), 'pagos_credito', ['fecha_pago'], unique=False)

    op.create_table('audit_logs',
        sa.Column('log_id', sa.Integer(), nullable=False),
        sa.Column('usuario_id', sa.Integer(), nullable=True),
        sa.Column('tabla', sa.String(length=50), nullable=False),
        sa.Column('accion', sa.String(length=50), nullable=False),
        sa.Column('registro_id', sa.Integer(), nullable=True),
        sa.Column('valores_antes', sa.JSON(), nullable=True),
        sa.Column('valores_despues', sa.JSON(), nullable=True),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('fecha', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['usuario_id'], ['usuarios.usuario_id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('log_id')
    )
    op.create_index(op.f('ix_audit_logs_log_id'), 'audit_logs', ['log_id'], unique=False)
    op.create_index(op.f('ix_audit_logs_tabla'), 'audit_logs', ['tabla'], unique=False)
    op.create_index(op.f('ix_audit_logs_accion'), 'audit_logs', ['accion'], unique=False)
    op.create_index(op.f('ix_audit_logs_fecha'), 'audit_logs', ['fecha'], unique=False)


def downgrade() -> None:
    op.drop_table('audit_logs')
    op.drop_table('pagos_credito')
    op.drop_table('ventas')
    op.drop_table('terrenos')
    op.drop_table('clientes_historial')
    op.drop_table('clientes')
    op.drop_table('usuarios')
    bind = op.get_bind()
    for enum in (estado_cuota_enum, estado_venta_enum, tipo_pago_enum, estado_terreno_enum,
                 tipo_terreno_enum, rol_enum, estado_enum):
        enum.drop(bind, checkfirst=True)
