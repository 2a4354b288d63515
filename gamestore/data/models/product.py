from sqlalchemy import Column, Integer, String, Numeric, Boolean, JSON, CheckConstraint

from gamestore.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    platforms = Column(JSON, nullable=False, default=list)
    image = Column(String(500), nullable=True)
    popularity = Column(Integer, nullable=False, default=0)
    #produkty typu subskrypcja (Game Pass itp.)
    subscription = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )
