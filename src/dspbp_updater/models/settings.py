"""Fixed settings for the blueprint repository."""

from typing import List

from pydantic import BaseModel


class UpdaterSettings(BaseModel):
    """Remote, branch and URL the updater keeps the working directory on."""

    remote_name: str = "origin"
    branch_name: str = "main"
    repo_url: str = "https://github.com/DSPBluePrints/FactoryBluePrints.git"
    # The updater binary usually sits inside the checkout it maintains
    ignored_paths: List[str] = ["dspbp_updater.exe", "dspbp-updater.exe"]

    model_config = {"frozen": True}

    @property
    def fetch_refspec(self) -> str:
        return f"refs/heads/*:refs/remotes/{self.remote_name}/*"

    @property
    def tracking_ref(self) -> str:
        return f"{self.remote_name}/{self.branch_name}"
