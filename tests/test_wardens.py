import pytest

from app.models.base.enums import Block
from app.schemas.warden import WardenAssign
from app.services.common.errors import AlreadyExistsError, NotFoundError


def _assign(block, email):
    return WardenAssign(name="Block Warden", email=email, mobile="+91 99887 76655", block=block)


def test_one_warden_per_block(warden_service):
    warden = warden_service.assign_warden(_assign(Block.A, "a@hostel.edu"))
    assert warden_service.get_warden_for_block(Block.A).id == warden.id
    assert warden_service.get_warden_for_block(Block.B) is None

    with pytest.raises(AlreadyExistsError):
        warden_service.assign_warden(_assign(Block.A, "other@hostel.edu"))
    with pytest.raises(AlreadyExistsError):
        warden_service.assign_warden(_assign(Block.B, "a@hostel.edu"))


def test_remove_warden_frees_block(warden_service):
    warden = warden_service.assign_warden(_assign(Block.C, "c@hostel.edu"))
    warden_service.remove_warden(warden.id)
    assert warden_service.list_wardens() == []
    assert warden_service.assign_warden(_assign(Block.C, "c2@hostel.edu")).block == Block.C

    with pytest.raises(NotFoundError):
        warden_service.remove_warden(warden.id)
