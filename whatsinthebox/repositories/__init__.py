from whatsinthebox.repositories.box_repository import BoxOrder, BoxRepository
