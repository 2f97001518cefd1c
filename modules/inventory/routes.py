from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from extensions import db
from modules.auth.permissions import permission_required
from modules.inventory.forms import ProductFilterForm, ProductForm
from modules.inventory.models import UnitType
from modules.inventory.services import (
    find_duplicate_barcode,
    get_all_categories,
    get_product,
    search_products,
    update_product_details,
)

inventory_bp = Blueprint('inventory', __name__, url_prefix='/inventory', template_folder='templates')


# 🗂️ Product list with search and category filter
@inventory_bp.route('/')
@permission_required('inventory')
def index():
    form = ProductFilterForm(request.args)
    form.set_categories(get_all_categories())

    products = search_products(form.search.data, form.category.data)
    return render_template(
        'inventory/index.html',
        form=form,
        items=products,
        low_stock=current_app.config.get('LOW_STOCK_THRESHOLD', 10),
    )


# ✏️ Edit descriptive fields; quantity only moves through inbound/outbound
@inventory_bp.route('/<product_id>/edit', methods=['GET', 'POST'])
@permission_required('inventory')
def edit(product_id):
    product = get_product(product_id)
    if product is None:
        flash('Product not found.', 'warning')
        return redirect(url_for('inventory.index'))

    form = ProductForm(obj=product)
    form.set_categories(get_all_categories(), current=product.category)
    if request.method == 'GET':
        form.unit.data = product.unit.value

    if form.validate_on_submit():
        product.name = form.name.data.strip()
        product.category = form.category.data
        product.unit = UnitType(form.unit.data)
        product.barcode = form.barcode.data.strip()

        duplicate = find_duplicate_barcode(product)
        if duplicate is not None:
            flash(f"Barcode {product.barcode} is also used by '{duplicate.name}'.", 'warning')

        try:
            update_product_details(product)
        except Exception:
            db.session.rollback()
            current_app.logger.exception("Update Product failed")
            flash('Could not save changes.', 'danger')
            return render_template('inventory/form.html', form=form, product=product)

        flash('Product updated.', 'success')
        return redirect(url_for('inventory.index'))

    if request.method == 'POST':
        current_app.logger.warning("ProductForm POST errors=%s product=%s", dict(form.errors or {}), product_id)

    return render_template('inventory/form.html', form=form, product=product)
