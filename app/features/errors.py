"""
Erreurs métier de la couche commandes / clients.

Chaque erreur porte le message affiché tel quel à l'utilisateur.
Les routes les traduisent en HTTPException (400 / 404 / 500).
"""


class DomainError(Exception):
    """Erreur métier avec message utilisateur."""
    message = "Erreur serveur."

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(DomainError):
    """Champ manquant ou invalide (corrigible par l'utilisateur)."""
    message = "Tous les champs obligatoires doivent être remplis."


class DuplicateEmail(DomainError):
    """Email déjà utilisé par un autre client."""
    message = "Cet email existe déjà."


class CustomerHasOrders(DomainError):
    """Suppression d'un client encore référencé par des commandes."""
    message = "Impossible de supprimer un client ayant des commandes."


class InvalidStatus(DomainError):
    """Statut hors de {Expédiée, Livrée}."""
    message = "Statut invalide."


class CustomerNotFound(DomainError, LookupError):
    message = "Client non trouvé."


class StorageError(DomainError):
    """Erreur inattendue de la base (loggée, message générique)."""
    message = "Erreur serveur."
