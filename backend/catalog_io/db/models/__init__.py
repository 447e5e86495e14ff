# import all models for Alembic
from catalog_io.db.models.product import Product
from catalog_io.db.models.editorial_review import EditorialReview
from catalog_io.db.models.import_run import ImportRun
