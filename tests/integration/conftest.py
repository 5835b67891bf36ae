import pytest
from sqlalchemy.orm import Session

from collab.db import models
from collab.utils.role_permissions import resolve_permissions

# Domain fixtures


@pytest.fixture
def user_factory(db_session: Session):
    def _create(username: str, is_superadmin: bool = False, email: str = None, display_name: str = None):
        user = models.User(
            username=username,
            email=email,
            display_name=display_name or username,
            is_superadmin=is_superadmin,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _create


@pytest.fixture
def project_factory(db_session: Session):
    def _create(owner, name: str = "Project", description: str = None):
        project = models.Project(name=name, description=description, owner_id=owner.id)
        db_session.add(project)
        db_session.commit()
        db_session.refresh(project)
        return project
    return _create


@pytest.fixture
def membership_factory(db_session: Session):
    def _create(teamspace, user, role: str = 'editor', can_read: bool = None, can_write: bool = None):
        m = models.TeamspaceMembership(
            teamspace_id=teamspace.id,
            user_id=user.id,
            role=role,
            **resolve_permissions(role, can_read=can_read, can_write=can_write),
        )
        db_session.add(m)
        db_session.commit()
        return m
    return _create


@pytest.fixture
def teamspace_factory(db_session: Session, membership_factory):
    def _create(name: str = "Team", owner=None, project=None):
        ts = models.Teamspace(
            name=name,
            project_id=project.id if project is not None else None,
            created_by=owner.id if owner is not None else None,
        )
        db_session.add(ts)
        db_session.commit()
        db_session.refresh(ts)
        if owner is not None:
            membership_factory(ts, owner, role='owner')
        return ts
    return _create


@pytest.fixture
def team_context(user_factory, teamspace_factory, membership_factory):
    """Teamspace owned by alice with bob (editor) and vera (viewer); carol is an outsider."""
    alice = user_factory("alice")
    bob = user_factory("bob")
    vera = user_factory("vera")
    carol = user_factory("carol")
    ts = teamspace_factory("Core Team", owner=alice)
    membership_factory(ts, bob, role='editor')
    membership_factory(ts, vera, role='viewer')
    return {"teamspace": ts, "alice": alice, "bob": bob, "vera": vera, "carol": carol}
