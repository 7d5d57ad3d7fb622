"""Create units, recipes, grocery lists, items and the list/recipe pivot

Revision ID: 3b7d2e91c4a0
Revises:
Create Date: 2026-10-19 09:12:44.118203

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b7d2e91c4a0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'units',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=False),
        sa.Column('unit_type', sa.String(length=20), nullable=False),
        sa.Column('is_standardized', sa.Boolean(), nullable=False),
        sa.Column('conversion_factor', sa.Numeric(precision=10, scale=6), nullable=True),
        sa.Column('abbreviation', sa.String(length=20), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('units', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_units_name'), ['name'], unique=True)
        batch_op.create_index(batch_op.f('ix_units_unit_type'), ['unit_type'], unique=False)
        batch_op.create_index(batch_op.f('ix_units_is_standardized'), ['is_standardized'], unique=False)

    op.create_table(
        'recipes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('servings', sa.Integer(), nullable=True),
        sa.Column('ingredients', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('recipes', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipes_name'), ['name'], unique=True)

    op.create_table(
        'grocery_lists',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('grocery_lists', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_grocery_lists_name'), ['name'], unique=False)
        batch_op.create_index(batch_op.f('ix_grocery_lists_completed_at'), ['completed_at'], unique=False)
        batch_op.create_index(batch_op.f('ix_grocery_lists_created_at'), ['created_at'], unique=False)

    op.create_table(
        'grocery_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('grocery_list_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=True),
        sa.Column('quantity', sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column('unit_id', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_checked', sa.Boolean(), nullable=False),
        sa.Column('checked_at', sa.DateTime(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('estimated_price', sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column('recipe_id', sa.Integer(), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['grocery_list_id'], ['grocery_lists.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['unit_id'], ['units.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('grocery_items', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_grocery_items_grocery_list_id'), ['grocery_list_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_grocery_items_name'), ['name'], unique=False)
        batch_op.create_index(batch_op.f('ix_grocery_items_unit_id'), ['unit_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_grocery_items_recipe_id'), ['recipe_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_grocery_items_deleted_at'), ['deleted_at'], unique=False)

    op.create_table(
        'grocery_list_recipes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('grocery_list_id', sa.Integer(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('servings', sa.Integer(), nullable=False),
        sa.Column('selected_item_ids', sa.JSON(), nullable=True),
        sa.Column('auto_generated', sa.Boolean(), nullable=False),
        sa.Column('version', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['grocery_list_id'], ['grocery_lists.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('grocery_list_id', 'recipe_id', name='uq_grocery_list_recipe'),
    )
    with op.batch_alter_table('grocery_list_recipes', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_grocery_list_recipes_grocery_list_id'), ['grocery_list_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_grocery_list_recipes_recipe_id'), ['recipe_id'], unique=False)


def downgrade():
    op.drop_table('grocery_list_recipes')
    op.drop_table('grocery_items')
    op.drop_table('grocery_lists')
    op.drop_table('recipes')
    op.drop_table('units')
