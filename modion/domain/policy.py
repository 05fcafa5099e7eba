from modion.domain.entities import Article, User


class PolicyEngine:
    """Ownership rules for article mutations."""

    def can_modify_article(self, user: User | None, article: Article) -> bool:
        """Admins may modify any article; everyone else only their own."""
        if user is None:
            return False
        if user.is_admin:
            return True
        return str(article.author_id) == str(user.id)
