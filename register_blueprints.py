def register_blueprints(app):
    from modules.auth.routes import auth_bp
    from modules.dashboard.routes import dashboard_bp
    from modules.warehouse import warehouse_bp
    from modules.inventory.routes import inventory_bp
    from modules.users.routes import users_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)

    # Block "Warehouse": inbound / outbound
    app.register_blueprint(warehouse_bp)

    app.register_blueprint(inventory_bp)
    app.register_blueprint(users_bp)
