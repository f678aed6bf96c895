from yardworks import db


class Customer(db.Model):
    __tablename__ = 'customer'
    __table_args__ = {'sqlite_autoincrement': True}
    id         = db.Column(db.Integer, primary_key=True)
    name       = db.Column(db.String(200), nullable=False)
    email      = db.Column(db.String(254), unique=True, nullable=False)
    phone      = db.Column(db.String(64), nullable=False)
    address    = db.Column(db.String(256), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False)

    quotes = db.relationship('Quote', backref='customer', lazy=True)


class Quote(db.Model):
    __tablename__ = 'quote'
    __table_args__ = {'sqlite_autoincrement': True}
    id             = db.Column(db.Integer, primary_key=True)
    quote_number   = db.Column(db.String(32), unique=True, nullable=False)
    # sequence behind quote_number, kept separately so the next one is a MAX()
    number_seq     = db.Column(db.Integer, unique=True, nullable=False)
    customer_id    = db.Column(db.Integer, db.ForeignKey('customer.id'), nullable=False)
    project_type   = db.Column(db.String(128), nullable=False)
    property_size  = db.Column(db.Integer, nullable=False)
    budget_range   = db.Column(db.String(128))
    description    = db.Column(db.Text, nullable=False)
    timeline       = db.Column(db.String(128))
    status         = db.Column(db.String(32), nullable=False, default='pending')
    amount         = db.Column(db.Numeric(10, 2))
    requested_date = db.Column(db.DateTime(timezone=True), nullable=False)
    valid_until    = db.Column(db.DateTime(timezone=True), nullable=False)
    created_at     = db.Column(db.DateTime(timezone=True), nullable=False)
    updated_at     = db.Column(db.DateTime(timezone=True), nullable=False)

    items = db.relationship(
        'QuoteItem',
        backref='quote',
        lazy=True,
        cascade='all, delete-orphan'
    )


class QuoteItem(db.Model):
    __tablename__ = 'quote_item'
    __table_args__ = {'sqlite_autoincrement': True}
    id         = db.Column(db.Integer, primary_key=True)
    quote_id   = db.Column(db.Integer, db.ForeignKey('quote.id'), nullable=False)
    item       = db.Column(db.String(200), nullable=False)
    quantity   = db.Column(db.Integer, nullable=False, default=1)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)
    total      = db.Column(db.Numeric(10, 2), nullable=False)
