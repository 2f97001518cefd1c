from flask import current_app, flash, g, redirect, render_template, request, send_file, url_for

from modules.auth.permissions import permission_required
from modules.inventory.services import get_all_categories, get_product, get_product_by_barcode
from . import warehouse_bp
from .barcodes import barcode_svg, generate_barcode, label_pdf
from .forms import IntakeForm, OutboundForm, ScanForm
from .intake import IntakeMode, receive, scan
from .models import TxType
from .services import update_stock


# ---------- HELPERS ----------

def _actor():
    ctx = g.get("session_ctx")
    return ctx.username if ctx else None


def _intake_form(state, formdata=None):
    form = IntakeForm(formdata=formdata)
    form.set_categories(get_all_categories())
    if formdata is None:
        form.barcode.data = state.barcode
        if state.mode is IntakeMode.KNOWN:
            form.name.data = state.product.name
            form.category.data = state.product.category
            form.unit.data = state.product.unit.value
    if state.locked:
        for field in (form.name, form.category, form.new_category, form.unit):
            field.render_kw = {"disabled": True}
    return form


def _render_intake(scan_form, state, form):
    preview = None
    if state.barcode:
        preview = barcode_svg(state.barcode)
    return render_template(
        "warehouse/stock_in.html",
        scan_form=scan_form,
        state=state,
        form=form,
        preview=preview,
    )


# ---------- INBOUND ----------

@warehouse_bp.route("/in", endpoint="stock_in")
@permission_required("inbound")
def stock_in():
    scan_form = ScanForm(request.args)
    code = (scan_form.barcode.data or "").strip()
    if code and not scan_form.validate():
        for errors in scan_form.errors.values():
            for err in errors:
                flash(err, "danger")
        return redirect(url_for("warehouse.stock_in"))

    state = scan(code)
    if state.mode is IntakeMode.KNOWN:
        flash("Product found! Enter the quantity.", "success")
    elif state.mode is IntakeMode.NEW:
        if request.args.get("generated"):
            flash("New barcode generated.", "success")
        else:
            flash("New product! Fill in the details.", "success")

    form = _intake_form(state) if state.mode is not IntakeMode.IDLE else None
    return _render_intake(scan_form, state, form)


@warehouse_bp.route("/in/generate", endpoint="generate_code")
@permission_required("inbound")
def generate_code():
    code = generate_barcode()
    # a clash with an existing product is unlikely but cheap to avoid
    for _ in range(5):
        if get_product_by_barcode(code) is None:
            break
        code = generate_barcode()
    return redirect(url_for("warehouse.stock_in", barcode=code, generated=1))


@warehouse_bp.route("/in", methods=["POST"], endpoint="stock_in_submit")
@permission_required("inbound")
def stock_in_submit():
    state = scan(request.form.get("barcode"))
    form = _intake_form(state, formdata=request.form)
    scan_form = ScanForm(formdata=None, data={"barcode": state.barcode})

    if state.mode is IntakeMode.IDLE or not scan_form.validate():
        flash("Scan or enter a valid barcode first.", "danger")
        return redirect(url_for("warehouse.stock_in"))

    if not form.validate_on_submit():
        current_app.logger.warning("IntakeForm POST errors=%s barcode=%s", dict(form.errors or {}), state.barcode)
        flash("Fill in all fields!", "danger")
        return _render_intake(scan_form, state, form), 400

    result = receive(
        state,
        form.quantity.data,
        name=form.name.data,
        category=form.final_category(),
        unit=form.unit.data,
        username=_actor(),
    )
    if not result.ok:
        flash(result.error, "danger")
        return _render_intake(scan_form, state, form), 400

    if result.created:
        flash("New product added to the warehouse!", "success")
    else:
        flash("Product quantity updated!", "success")
    return redirect(url_for("warehouse.stock_in"))


@warehouse_bp.route("/label", endpoint="label")
@permission_required("inbound")
def label():
    scan_form = ScanForm(request.args)
    if not scan_form.validate():
        flash("Nothing to print: barcode is missing or invalid.", "warning")
        return redirect(url_for("warehouse.stock_in"))

    code = scan_form.barcode.data.strip()
    product = get_product_by_barcode(code)
    name = product.name if product else request.args.get("name", "")
    category = product.category if product else request.args.get("category", "")

    return send_file(
        label_pdf(code, name, category),
        as_attachment=False,
        download_name=f"label_{code}.pdf",
        mimetype="application/pdf",
    )


# ---------- OUTBOUND ----------

@warehouse_bp.route("/out", endpoint="stock_out")
@permission_required("outbound")
def stock_out():
    scan_form = ScanForm(request.args)
    code = (scan_form.barcode.data or "").strip()
    product = None
    form = None

    if code:
        product = get_product_by_barcode(code)
        if product is None:
            flash("Product not found!", "danger")
        else:
            form = OutboundForm()

    return render_template("warehouse/stock_out.html", scan_form=scan_form, product=product, form=form)


@warehouse_bp.route("/out/<product_id>", methods=["POST"], endpoint="stock_out_submit")
@permission_required("outbound")
def stock_out_submit(product_id):
    product = get_product(product_id)
    if product is None:
        flash("Product not found!", "danger")
        return redirect(url_for("warehouse.stock_out"))

    form = OutboundForm()
    if not form.validate_on_submit():
        current_app.logger.warning("OutboundForm POST errors=%s product=%s", dict(form.errors or {}), product_id)
        flash("Invalid amount!", "danger")
        return redirect(url_for("warehouse.stock_out", barcode=product.barcode))

    amount = form.amount.data
    if update_stock(product.id, amount, TxType.OUTBOUND, _actor()):
        flash(f"{product.name} - {amount} {product.unit.label} dispatched.", "success")
        return redirect(url_for("warehouse.stock_out"))

    # reload: the routine may have failed because the product disappeared
    product = get_product(product_id)
    if product is None:
        flash("Product not found!", "danger")
        return redirect(url_for("warehouse.stock_out"))
    flash(f"Not enough stock! Available: {product.quantity} {product.unit.label}", "danger")
    return redirect(url_for("warehouse.stock_out", barcode=product.barcode))
