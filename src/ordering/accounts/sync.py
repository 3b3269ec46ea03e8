"""Account sync: commands the identity service uses to keep records current."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.accounts.account import Account
from ordering.domain import ordering


@ordering.command(part_of="Account")
class RegisterAccount:
    account_id = Identifier()
    name = String(required=True, max_length=150)
    email = String(required=True, max_length=254)
    role = String(required=True, max_length=20)
    seller_status = String(max_length=20)


@ordering.command(part_of="Account")
class UpdateSellerStatus:
    account_id = Identifier(required=True)
    seller_status = String(required=True, max_length=20)


@ordering.command_handler(part_of=Account)
class AccountSyncHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        account = Account.register(
            name=command.name,
            email=command.email,
            role=command.role,
            account_id=command.account_id,
            seller_status=command.seller_status,
        )
        current_domain.repository_for(Account).add(account)
        return str(account.id)

    @handle(UpdateSellerStatus)
    def update_seller_status(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.get(command.account_id)
        account.change_seller_status(command.seller_status)
        repo.add(account)
