# Importe les modèles pour enregistrer leurs tables dans Base.metadata
# avant la création du schéma au démarrage.

from app.models.student import Student  # noqa: F401
